"""Global FastAPI dependencies for tenant isolation.

This module provides:
- require_tenant_context: refuse requests that reach a tenant route unbound
- get_or_404: tenant-safe lookup by id for route handlers

Tenant routers declare require_tenant_context as a router-level dependency.
Handlers then use the DataClient without adding tenant filters of their own.
"""

from typing import Any, Optional, Type

from fastapi import HTTPException, status

from datastore.client import DataClient
from tenancy.context import get_active_tenant


def require_tenant_context() -> str:
    """Return the active tenant, or refuse the request with 401.

    A tenant route reached without a resolved identity must never proceed
    unscoped.

    Raises:
        HTTPException 401: If no tenant is bound for this request
    """
    tenant_id = get_active_tenant()
    if tenant_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required for tenant isolation",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return tenant_id


def get_or_404(client: DataClient, model: Type, record_id: Any, detail: Optional[str] = None) -> Any:
    """Get a record by id, or raise 404.

    Returns 404 both for records that don't exist and for records of another
    tenant (the data client reports those as not found), so callers cannot
    learn whether an id exists elsewhere.
    """
    record = client.find_unique(model, where={"id": str(record_id)})
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{model.__name__} not found",
        )
    return record
