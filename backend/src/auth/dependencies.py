"""FastAPI dependencies for authentication and authorization.

This module provides dependency injection functions for:
- Extracting and validating JWT tokens from requests
- Loading the current authenticated user through the tenant-scoped data client
- Enforcing role-based access control (RBAC)

Usage:
    @app.get("/protected")
    def protected_endpoint(user: User = Depends(get_current_user)):
        return {"message": f"Hello {user.first_name}"}
"""

from typing import Callable, Annotated, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt

from database import get_data_client
from datastore.client import DataClient
from models.user import User
from tenancy.context import get_active_tenant
from .jwt import decode_token
from .roles import UserRole, has_permission


# HTTP Bearer token security scheme (missing header handled below as 401)
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    client: DataClient = Depends(get_data_client)
) -> User:
    """Extract and validate JWT token, returning the authenticated user.

    This dependency:
    1. Extracts Bearer token from Authorization header
    2. Validates token signature and expiration
    3. Checks the request is bound to the token's tenant
    4. Loads the user through the tenant-scoped client
    5. Checks the user is active

    Raises:
        HTTPException 401: If token is missing, invalid, expired, not bound to
            its tenant, or the user is not found in that tenant
        HTTPException 403: If the user account is inactive
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        raise _unauthorized(str(e))

    user_id = payload.get("sub")
    tenant_id = payload.get("tenant_id")
    if not user_id or not tenant_id:
        raise _unauthorized("Invalid token: missing user or tenant claim")

    # The boundary middleware must have bound this token's tenant
    if get_active_tenant() != tenant_id:
        raise _unauthorized("Authentication required for tenant isolation")

    user = client.find_unique(User, where={"id": user_id})
    if not user:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    return user


def require_role(required_role: UserRole) -> Callable:
    """Create a dependency that enforces role-based access control.

    Example:
        @app.delete("/customer-orders/{order_id}")
        def delete_order(user: User = Depends(require_role(UserRole.STAFF))):
            ...
    """

    def role_dependency(current_user: User = Depends(get_current_user)) -> User:
        try:
            user_role = UserRole(current_user.role)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Invalid user role: {current_user.role}",
            )

        if not has_permission(user_role, required_role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required role: {required_role.value}",
            )

        return current_user

    return role_dependency


# Type alias for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
