"""Unit tests for the tenant isolation interceptor

The interceptor is exercised without a database: call_next records the
operation it receives and returns a canned result.

Tests cover:
- where injection for find_many / find_first / count
- tenant stamping for create / create_many
- update / delete scoping and tenant_id stripping
- find_unique post-read validation
- pass-through for global models and the unset context
"""

import logging
from types import SimpleNamespace

import pytest

from datastore.operations import Action, Operation
from datastore.results import ReadOutcome, ReadStatus
from models.customer_order import CustomerOrder
from models.user import User
from tenancy.interceptor import (
    TenantIsolationMiddleware,
    constrains_tenant,
    scope_where,
    scope_write_where,
    stamp_tenant,
)
from tenancy.registry import TenantRegistry


@pytest.fixture
def registry():
    return TenantRegistry({"CustomerOrder": CustomerOrder, "User": User})


def make_middleware(registry, tenant_id):
    return TenantIsolationMiddleware(registry=registry, tenant_provider=lambda: tenant_id)


class Recorder:
    """call_next stand-in capturing the rewritten operation."""

    def __init__(self, result=None):
        self.result = result
        self.operations = []

    def __call__(self, operation):
        self.operations.append(operation)
        return self.result

    @property
    def last(self):
        return self.operations[-1]


class TestScopeWhere:
    """Test the where rewriting rules"""

    def test_no_where_becomes_exact_tenant_filter(self):
        assert scope_where(None, "tenant-123") == {"tenant_id": "tenant-123"}

    def test_tenant_is_added_to_existing_filter(self):
        where = {"status": "DRAFT"}

        assert scope_where(where, "tenant-123") == {"status": "DRAFT", "tenant_id": "tenant-123"}
        # Caller's dict is untouched
        assert where == {"status": "DRAFT"}

    def test_explicit_tenant_is_kept(self):
        assert scope_where({"tenant_id": "tenant-999"}, "tenant-123") == {"tenant_id": "tenant-999"}

    def test_explicit_none_tenant_is_replaced(self):
        assert scope_where({"tenant_id": None}, "tenant-123") == {"tenant_id": "tenant-123"}

    def test_unset_context_leaves_where_alone(self):
        assert scope_where(None, None) is None
        assert scope_where({"status": "DRAFT"}, None) == {"status": "DRAFT"}

    def test_nested_tenant_filter_does_not_count(self):
        assert constrains_tenant({"OR": [{"tenant_id": "tenant-999"}]}) is False
        assert scope_where({"OR": [{"tenant_id": "tenant-999"}]}, "tenant-123") == {
            "OR": [{"tenant_id": "tenant-999"}],
            "tenant_id": "tenant-123",
        }

    def test_operator_tenant_filter_is_combined_with_active_tenant(self):
        where = {"tenant_id": {"in": ["tenant-123", "tenant-999"]}, "status": "DRAFT"}

        assert constrains_tenant(where) is False
        assert scope_where(where, "tenant-123") == {
            "status": "DRAFT",
            "tenant_id": "tenant-123",
            "AND": [{"tenant_id": {"in": ["tenant-123", "tenant-999"]}}],
        }
        assert where == {"tenant_id": {"in": ["tenant-123", "tenant-999"]}, "status": "DRAFT"}

    def test_operator_tenant_filter_joins_existing_and(self):
        where = {"AND": [{"status": "DRAFT"}], "tenant_id": {"not": "tenant-123"}}

        assert scope_where(where, "tenant-123") == {
            "tenant_id": "tenant-123",
            "AND": [{"status": "DRAFT"}, {"tenant_id": {"not": "tenant-123"}}],
        }


class TestScopeWriteWhere:
    """update / delete filters never honor a caller tenant"""

    def test_foreign_plain_tenant_is_combined(self):
        assert scope_write_where({"id": "order-1", "tenant_id": "tenant-999"}, "tenant-123") == {
            "id": "order-1",
            "tenant_id": "tenant-123",
            "AND": [{"tenant_id": "tenant-999"}],
        }

    def test_own_plain_tenant_is_kept_flat(self):
        assert scope_write_where({"id": "order-1", "tenant_id": "tenant-123"}, "tenant-123") == {
            "id": "order-1",
            "tenant_id": "tenant-123",
        }

    def test_operator_tenant_is_combined(self):
        assert scope_write_where({"tenant_id": {"not": "nobody"}}, "tenant-123") == {
            "tenant_id": "tenant-123",
            "AND": [{"tenant_id": {"not": "nobody"}}],
        }

    def test_no_where_becomes_exact_tenant_filter(self):
        assert scope_write_where(None, "tenant-123") == {"tenant_id": "tenant-123"}


class TestStampTenant:
    def test_missing_tenant_is_stamped(self):
        assert stamp_tenant({"name": "Rye"}, "tenant-123") == {"name": "Rye", "tenant_id": "tenant-123"}

    def test_explicit_tenant_is_kept_verbatim(self):
        assert stamp_tenant({"tenant_id": "tenant-999"}, "tenant-123") == {"tenant_id": "tenant-999"}

    def test_unset_context_does_not_stamp(self):
        assert stamp_tenant({"name": "Rye"}, None) == {"name": "Rye"}


class TestReadRewrite:
    """Test find_many / find_first / count rewriting"""

    @pytest.mark.parametrize("action", [Action.FIND_MANY, Action.FIND_FIRST, Action.COUNT])
    def test_reads_are_scoped(self, registry, action):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder(result=[])

        operation = Operation("CustomerOrder", action, {"where": {"status": "DRAFT"}})
        middleware(operation, call_next)

        assert call_next.last.where == {"status": "DRAFT", "tenant_id": "tenant-123"}
        # Original operation is not mutated
        assert operation.where == {"status": "DRAFT"}

    def test_read_without_where(self, registry):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder(result=[])

        middleware(Operation("CustomerOrder", Action.FIND_MANY), call_next)

        assert call_next.last.where == {"tenant_id": "tenant-123"}

    def test_other_args_are_preserved(self, registry):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder(result=[])

        operation = Operation(
            "CustomerOrder",
            Action.FIND_MANY,
            {"where": {"status": "DRAFT"}, "order_by": {"order_number": "desc"}, "take": 5},
        )
        middleware(operation, call_next)

        assert call_next.last.args["order_by"] == {"order_number": "desc"}
        assert call_next.last.args["take"] == 5

    def test_result_is_returned_unchanged(self, registry):
        rows = [SimpleNamespace(tenant_id="tenant-123")]
        middleware = make_middleware(registry, "tenant-123")

        assert middleware(Operation("CustomerOrder", Action.FIND_MANY), Recorder(result=rows)) is rows

    def test_global_model_passes_through(self, registry):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder(result=[])

        operation = Operation("Tenant", Action.FIND_MANY, {"where": {"slug": "x"}})
        middleware(operation, call_next)

        assert call_next.last is operation

    def test_unset_context_reads_unscoped_and_warns(self, registry, caplog):
        middleware = make_middleware(registry, None)
        call_next = Recorder(result=[])

        with caplog.at_level(logging.WARNING, logger="tenancy.interceptor"):
            middleware(Operation("CustomerOrder", Action.FIND_MANY), call_next)

        assert call_next.last.where is None
        assert "no active tenant" in caplog.text


class TestCreateRewrite:
    """Test create / create_many stamping"""

    def test_create_is_stamped(self, registry):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder()

        middleware(Operation("CustomerOrder", Action.CREATE, {"data": {"order_number": "ORD-1"}}), call_next)

        assert call_next.last.data == {"order_number": "ORD-1", "tenant_id": "tenant-123"}

    def test_create_with_explicit_tenant_is_kept(self, registry, caplog):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder()

        with caplog.at_level(logging.INFO, logger="tenancy.interceptor"):
            middleware(Operation("CustomerOrder", Action.CREATE, {"data": {"tenant_id": "tenant-999"}}), call_next)

        assert call_next.last.data == {"tenant_id": "tenant-999"}
        assert "kept verbatim" in caplog.text

    def test_create_many_stamps_each_item(self, registry):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder(result=2)

        operation = Operation(
            "CustomerOrder",
            Action.CREATE_MANY,
            {"data": [{"order_number": "ORD-1"}, {"order_number": "ORD-2", "tenant_id": "tenant-999"}]},
        )
        middleware(operation, call_next)

        assert call_next.last.data == [
            {"order_number": "ORD-1", "tenant_id": "tenant-123"},
            {"order_number": "ORD-2", "tenant_id": "tenant-999"},
        ]


class TestWriteRewrite:
    """Test update / delete scoping"""

    @pytest.mark.parametrize("action", [Action.UPDATE, Action.UPDATE_MANY, Action.DELETE, Action.DELETE_MANY])
    def test_writes_are_scoped(self, registry, action):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder()

        middleware(Operation("CustomerOrder", action, {"where": {"id": "order-1"}}), call_next)

        assert call_next.last.where == {"id": "order-1", "tenant_id": "tenant-123"}

    @pytest.mark.parametrize("action", [Action.UPDATE, Action.UPDATE_MANY, Action.DELETE, Action.DELETE_MANY])
    def test_caller_tenant_in_where_cannot_widen_writes(self, registry, action, caplog):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder()

        with caplog.at_level(logging.WARNING, logger="tenancy.interceptor"):
            middleware(Operation("CustomerOrder", action, {"where": {"tenant_id": "tenant-999"}}), call_next)

        assert call_next.last.where == {"tenant_id": "tenant-123", "AND": [{"tenant_id": "tenant-999"}]}
        assert "combined with active tenant" in caplog.text

    def test_update_cannot_reassign_tenant(self, registry, caplog):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder()

        operation = Operation(
            "CustomerOrder",
            Action.UPDATE,
            {"where": {"id": "order-1"}, "data": {"status": "CONFIRMED", "tenant_id": "tenant-999"}},
        )
        with caplog.at_level(logging.WARNING, logger="tenancy.interceptor"):
            middleware(operation, call_next)

        assert call_next.last.data == {"status": "CONFIRMED"}
        assert "cannot be reassigned" in caplog.text


class TestFindUniqueValidation:
    """Test post-read validation of find_unique"""

    def test_where_is_not_rewritten(self, registry):
        middleware = make_middleware(registry, "tenant-123")
        call_next = Recorder()

        operation = Operation("User", Action.FIND_UNIQUE, {"where": {"email": "a@b.example"}})
        middleware(operation, call_next)

        assert call_next.last is operation

    def test_own_record_is_found(self, registry):
        record = SimpleNamespace(tenant_id="tenant-123")
        middleware = make_middleware(registry, "tenant-123")

        outcome = middleware(Operation("User", Action.FIND_UNIQUE, {"where": {"id": "u"}}), Recorder(record))

        assert outcome == ReadOutcome.found(record)

    def test_foreign_record_is_forbidden(self, registry, caplog):
        record = SimpleNamespace(tenant_id="tenant-999")
        middleware = make_middleware(registry, "tenant-123")

        with caplog.at_level(logging.WARNING, logger="tenancy.interceptor"):
            outcome = middleware(Operation("User", Action.FIND_UNIQUE, {"where": {"id": "u"}}), Recorder(record))

        assert outcome.status is ReadStatus.FORBIDDEN
        assert outcome.record is None
        assert outcome.visible_record() is None
        assert "Suppressed cross-tenant" in caplog.text

    def test_missing_record_is_not_found(self, registry):
        middleware = make_middleware(registry, "tenant-123")

        outcome = middleware(Operation("User", Action.FIND_UNIQUE, {"where": {"id": "u"}}), Recorder(None))

        assert outcome.status is ReadStatus.NOT_FOUND

    def test_unset_context_returns_any_record(self, registry):
        record = SimpleNamespace(tenant_id="tenant-999")
        middleware = make_middleware(registry, None)

        outcome = middleware(Operation("User", Action.FIND_UNIQUE, {"where": {"email": "x@y.example"}}), Recorder(record))

        assert outcome.visible_record() is record


class TestRewriteIsPure:
    def test_rewrite_returns_new_operation(self, registry):
        middleware = make_middleware(registry, "tenant-123")
        data = {"order_number": "ORD-1"}
        operation = Operation("CustomerOrder", Action.CREATE, {"data": data})

        rewritten = middleware.rewrite(operation, "tenant-123")

        assert rewritten is not operation
        assert data == {"order_number": "ORD-1"}
        assert rewritten.data["tenant_id"] == "tenant-123"
