"""Tenant isolation interceptor for the data client.

Rewrites every operation on a tenant-scoped model against the active tenant
of the current unit of work:

- find_many / find_first / count: inject tenant_id into where, unless where
  pins tenant_id with plain equality (a privileged read); no where becomes
  exactly {"tenant_id": T}; operator dicts on tenant_id are AND-ed with T
- create / create_many: stamp tenant_id unless the payload sets one
  (explicit tenant is a privileged path and is kept verbatim)
- find_unique: not rewritten; result checked by validate_unique_read()
- update / update_many / delete / delete_many: tenant_id == T is always
  AND-ed onto where, with no explicit-tenant override; tenant_id is removed
  from update data (rows are never reassigned)

With no active tenant (pre-authentication) reads are left unconstrained.
The interceptor never raises on a scoping decision and performs no I/O.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from datastore.operations import (
    Action,
    CREATE_ACTIONS,
    READ_ACTIONS,
    WRITE_ACTIONS,
    Handler,
    Operation,
)
from datastore.results import ReadStatus
from .context import get_active_tenant
from .registry import TenantRegistry, get_tenant_registry
from .validator import TENANT_FIELD, validate_unique_read

logger = logging.getLogger(__name__)


def constrains_tenant(where: Optional[Mapping[str, Any]]) -> bool:
    """True if where pins tenant_id to one value with plain top-level equality.

    Operator dicts ({"in": [...]}, {"not": ...}) and nested logical filters
    do not count: they are combined with the active tenant instead.
    """
    if not where:
        return False
    value = where.get(TENANT_FIELD)
    return value is not None and not isinstance(value, Mapping)


def pin_tenant(where: Mapping[str, Any], tenant_id: str) -> Dict[str, Any]:
    """Return where with tenant_id == tenant_id AND-ed onto it.

    A caller-supplied tenant_id condition is kept under AND, so it can only
    narrow the result further.
    """
    pinned = dict(where)
    caller_tenant = pinned.pop(TENANT_FIELD, None)
    if caller_tenant is None or caller_tenant == tenant_id:
        pinned[TENANT_FIELD] = tenant_id
        return pinned

    existing = pinned.pop("AND", None)
    conditions = [existing] if isinstance(existing, Mapping) else list(existing or [])
    conditions.append({TENANT_FIELD: caller_tenant})
    pinned[TENANT_FIELD] = tenant_id
    pinned["AND"] = conditions
    return pinned


def scope_where(
    where: Optional[Mapping[str, Any]],
    tenant_id: Optional[str]
) -> Optional[Dict[str, Any]]:
    """Return a read filter constrained to tenant_id (see module docstring)."""
    if tenant_id is None:
        return dict(where) if where is not None else None
    if where is None:
        return {TENANT_FIELD: tenant_id}
    if constrains_tenant(where):
        return dict(where)
    return pin_tenant(where, tenant_id)


def scope_write_where(
    where: Optional[Mapping[str, Any]],
    tenant_id: Optional[str]
) -> Optional[Dict[str, Any]]:
    """Return an update/delete filter that can only match tenant_id's rows.

    Unlike reads there is no explicit-tenant override: any tenant_id the
    caller put in where is AND-ed with the active tenant.
    """
    if tenant_id is None:
        return dict(where) if where is not None else None
    if where is None:
        return {TENANT_FIELD: tenant_id}
    return pin_tenant(where, tenant_id)


def stamp_tenant(data: Mapping[str, Any], tenant_id: Optional[str]) -> Dict[str, Any]:
    """Return a create payload with tenant_id filled in when missing."""
    if tenant_id is None or data.get(TENANT_FIELD) is not None:
        return dict(data)
    return {**data, TENANT_FIELD: tenant_id}


class TenantIsolationMiddleware:
    """Data client middleware enforcing tenant isolation.

    Args:
        registry: Tenant-scoped model kinds (default: verified app registry)
        tenant_provider: Returns the active tenant (default: context var)
    """

    def __init__(
        self,
        registry: Optional[TenantRegistry] = None,
        tenant_provider: Callable[[], Optional[str]] = get_active_tenant,
    ):
        self.registry = registry or get_tenant_registry()
        self.tenant_provider = tenant_provider

    def rewrite(self, operation: Operation, tenant_id: Optional[str]) -> Operation:
        """Return the scoped form of operation. Pure; never mutates operation."""
        if not self.registry.is_scoped(operation.model):
            return operation

        action = operation.action

        if action in READ_ACTIONS:
            return operation.with_args(where=scope_where(operation.where, tenant_id))

        if action is Action.CREATE:
            return operation.with_args(data=stamp_tenant(operation.data or {}, tenant_id))

        if action is Action.CREATE_MANY:
            return operation.with_args(
                data=[stamp_tenant(item, tenant_id) for item in operation.data or []]
            )

        if action in WRITE_ACTIONS:
            where = scope_write_where(operation.where, tenant_id)
            if tenant_id is not None and (operation.where or {}).get(TENANT_FIELD) not in (None, tenant_id):
                logger.warning(
                    f"Caller tenant_id filter on {action.value} {operation.model} "
                    f"combined with active tenant {tenant_id}"
                )
            changes: Dict[str, Any] = {"where": where}
            if action in (Action.UPDATE, Action.UPDATE_MANY):
                data = dict(operation.data or {})
                if TENANT_FIELD in data:
                    logger.warning(
                        f"Dropped tenant_id from {action.value} on {operation.model}: "
                        "tenant-scoped records cannot be reassigned"
                    )
                    data.pop(TENANT_FIELD)
                changes["data"] = data
            return operation.with_args(**changes)

        # find_unique is validated after the read
        return operation

    def __call__(self, operation: Operation, call_next: Handler) -> Any:
        if not self.registry.is_scoped(operation.model):
            return call_next(operation)

        tenant_id = self.tenant_provider()
        self._log_decision(operation, tenant_id)

        result = call_next(self.rewrite(operation, tenant_id))

        if operation.action is Action.FIND_UNIQUE:
            outcome = validate_unique_read(operation.model, result, tenant_id, self.registry)
            if outcome.status is ReadStatus.FORBIDDEN:
                logger.warning(
                    f"Suppressed cross-tenant {operation.model} read",
                    extra={"tenant_id": tenant_id, "model": operation.model},
                )
            return outcome

        return result

    def _log_decision(self, operation: Operation, tenant_id: Optional[str]) -> None:
        if tenant_id is None and operation.action is not Action.FIND_UNIQUE:
            logger.warning(
                f"Unscoped {operation.action.value} on {operation.model}: no active tenant"
            )
        elif operation.action in CREATE_ACTIONS and tenant_id is not None:
            items = operation.data if isinstance(operation.data, list) else [operation.data or {}]
            explicit = {item.get(TENANT_FIELD) for item in items} - {None, tenant_id}
            if explicit:
                logger.info(
                    f"Explicit tenant_id on {operation.action.value} {operation.model} "
                    f"kept verbatim: {sorted(explicit)}"
                )


def setup_tenant_isolation(client, registry: Optional[TenantRegistry] = None):
    """Install tenant isolation on a DataClient and return the client."""
    middleware = TenantIsolationMiddleware(registry=registry)
    logger.debug(f"Tenant isolation installed for models: {sorted(middleware.registry.names)}")
    return client.use(middleware)


def create_data_client(session, registry: Optional[TenantRegistry] = None):
    """Return a DataClient on session with tenant isolation installed."""
    from datastore.client import DataClient

    return setup_tenant_isolation(DataClient(session), registry=registry)
