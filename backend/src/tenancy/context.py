"""Active-tenant context for the current unit of work.

The active tenant lives in a ContextVar, so every asyncio task, Starlette
threadpool call and asyncio.to_thread() worker sees the value of the request
that spawned it and never the value of a concurrently running request.

Lifecycle per unit of work:

    Unset --(authentication succeeds)--> Bound(tenant)

A bound unit of work cannot be rebound to another tenant, and there is no way
back to Unset except leaving the tenant_scope() that bound it.
"""

from contextlib import contextmanager
from contextvars import Context, ContextVar, Token
from typing import Any, Callable, Iterator, Optional, TypeVar

from .exceptions import TenantContextConflictError

T = TypeVar("T")

# None means "no tenant known yet" (pre-authentication)
_active_tenant: ContextVar[Optional[str]] = ContextVar("active_tenant", default=None)


def get_active_tenant() -> Optional[str]:
    """Return the tenant bound to the current unit of work, or None."""
    return _active_tenant.get()


def is_tenant_bound() -> bool:
    return _active_tenant.get() is not None


def bind_tenant(tenant_id: str) -> Token:
    """Bind the current context to a tenant.

    Binding the tenant that is already active is a no-op transition and
    returns a fresh token.

    Args:
        tenant_id: Tenant to bind

    Returns:
        Token: Pass to reset_tenant() when the unit of work ends

    Raises:
        ValueError: If tenant_id is empty
        TenantContextConflictError: If a different tenant is already bound
    """
    if not tenant_id:
        raise ValueError("tenant_id must not be empty")

    current = _active_tenant.get()
    if current is not None and current != tenant_id:
        raise TenantContextConflictError(current, tenant_id)

    return _active_tenant.set(tenant_id)


def reset_tenant(token: Token) -> None:
    """End a binding created by bind_tenant()."""
    _active_tenant.reset(token)


@contextmanager
def tenant_scope(tenant_id: str) -> Iterator[str]:
    """Run the enclosed block as a unit of work bound to tenant_id.

    Example:
        with tenant_scope(user.tenant_id):
            client.update(User, where={"id": user.id}, data={...})
    """
    token = bind_tenant(tenant_id)
    try:
        yield tenant_id
    finally:
        reset_tenant(token)


def run_in_tenant(tenant_id: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run fn in a fresh, empty context bound to tenant_id.

    Intended for background jobs and scripts: the job never inherits the
    caller's binding, so work for tenant B can be scheduled from a request
    bound to tenant A.
    """

    def _bound() -> T:
        with tenant_scope(tenant_id):
            return fn(*args, **kwargs)

    return Context().run(_bound)
