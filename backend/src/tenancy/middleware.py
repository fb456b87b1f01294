"""Middleware binding the active tenant for each HTTP request.

This module provides the context-setting boundary between the request
pipeline and the data layer. For a request with a valid Bearer token, the
token's tenant_id claim is bound with tenant_scope() for the rest of the
request; every DataClient operation issued while handling it is scoped to
that tenant.

Requests without a (valid) token leave the context unset. That is how the
login endpoint looks users up by email across all tenants. Routes that need a
tenant depend on dependencies.require_tenant_context, which refuses unbound
requests with 401.
"""

from typing import Callable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import jwt
import logging

from auth.jwt import decode_token
from .context import tenant_scope

logger = logging.getLogger(__name__)


def extract_bearer_token(request: Request) -> Optional[str]:
    """Return the Bearer token from the Authorization header, if well-formed."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


def resolve_token_tenant(token: Optional[str]) -> Optional[str]:
    """Validate token and return its tenant_id claim, or None."""
    if not token:
        return None

    try:
        payload = decode_token(token)
    except jwt.InvalidTokenError as e:
        # Authentication proper (and the 401) happens in get_current_user
        logger.debug(f"Ignoring invalid token for tenant context: {e}")
        return None

    return payload.get("tenant_id") or None


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Bind the authenticated tenant for the duration of the request.

    This middleware:
    1. Extracts the Bearer token from the Authorization header
    2. Validates the JWT and reads its tenant_id claim
    3. Attaches tenant_id to request.state for the request completion log
    4. Runs the rest of the request inside tenant_scope(tenant_id)

    The downstream handler runs in its own task created inside the scope, so
    the binding belongs to this request only; concurrent requests each carry
    their own value.

    Usage:
        app.add_middleware(TenantContextMiddleware)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with the tenant bound (if authenticated).

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response: FastAPI response object
        """
        tenant_id = resolve_token_tenant(extract_bearer_token(request))
        request.state.tenant_id = tenant_id

        if tenant_id is None:
            return await call_next(request)

        with tenant_scope(tenant_id):
            return await call_next(request)
