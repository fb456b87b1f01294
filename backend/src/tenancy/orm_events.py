"""SQLAlchemy session listeners backing up the data client interceptor.

Feature code should go through DataClient. These listeners cover code that
uses the Session directly:

- before_flush: new TenantScoped instances without tenant_id get the active
  tenant
- do_orm_execute: ORM SELECT / UPDATE / DELETE statements get
  tenant_id == active tenant criteria for every TenantScoped entity

Statements issued by the data client executor carry the tenant_rewritten
execution option and are left alone (the interceptor already scoped them).
"""

import logging

from sqlalchemy import event
from sqlalchemy.orm import Session, with_loader_criteria

from datastore.executor import TENANT_REWRITTEN
from models.base import TenantScoped
from .context import get_active_tenant

logger = logging.getLogger(__name__)


@event.listens_for(Session, "before_flush")
def auto_populate_tenant_id(session, flush_context, instances):
    """Set tenant_id on INSERT for new tenant-scoped records.

    Only fills in missing values; an explicit tenant_id is kept.
    """
    tenant_id = get_active_tenant()
    if tenant_id is None:
        return

    for instance in session.new:
        if isinstance(instance, TenantScoped) and instance.tenant_id is None:
            instance.tenant_id = tenant_id


@event.listens_for(Session, "do_orm_execute")
def add_tenant_criteria(orm_execute_state):
    """Restrict direct ORM statements to the active tenant's rows."""
    if orm_execute_state.execution_options.get(TENANT_REWRITTEN, False):
        return
    if not (
        orm_execute_state.is_select
        or orm_execute_state.is_update
        or orm_execute_state.is_delete
    ):
        return
    # Column and relationship loads inherit criteria from the parent statement
    if orm_execute_state.is_column_load or orm_execute_state.is_relationship_load:
        return

    tenant_id = get_active_tenant()
    if tenant_id is None:
        return

    orm_execute_state.statement = orm_execute_state.statement.options(
        with_loader_criteria(
            TenantScoped,
            lambda cls: cls.tenant_id == tenant_id,
            include_aliases=True,
        )
    )
