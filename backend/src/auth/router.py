"""Authentication endpoints

Provides endpoints for user login and retrieving current user information.
"""

import logging
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_db, get_data_client
from datastore.client import DataClient
from models.tenant import Tenant
from models.user import User
from tenancy.context import tenant_scope
from tenancy.exceptions import TenantContextConflictError
from .schemas import LoginRequest, LoginResponse, MeResponse, UserResponse
from .password import verify_password
from .jwt import create_access_token, _get_jwt_expiry_minutes
from .dependencies import CurrentUser
from models.base import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _invalid_credentials() -> HTTPException:
    # Generic message to prevent enumeration
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid email or password"
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    client: Annotated[DataClient, Depends(get_data_client)]
):
    """Authenticate user and return JWT access token.

    Login runs before any tenant is known, so the user lookup by email is an
    unscoped unique read. The tenant is only bound (for the last_login_at
    update) once the credentials check out.

    Security measures:
    - Constant-time password verification (argon2)
    - Inactive users and users of inactive tenants are rejected
    - last_login_at is updated on successful login

    Raises:
        HTTPException: 401 if credentials are invalid or the account/tenant is disabled
    """
    email = credentials.email.lower()

    # Step 1: Look up user by email across tenants
    user = client.find_unique(User, where={"email": email})

    # Step 2: Verify password
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.info("Login failed: invalid credentials", extra={"email": email})
        raise _invalid_credentials()

    # Step 3: Reject disabled accounts
    if not user.is_active:
        logger.info("Login failed: account disabled", extra={"email": email})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is disabled"
        )

    tenant = client.find_unique(Tenant, where={"id": user.tenant_id})
    if tenant is None or not tenant.is_active:
        logger.info("Login failed: tenant disabled", extra={"email": email})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is disabled"
        )

    # Step 4: Update last_login_at inside the user's tenant
    try:
        with tenant_scope(user.tenant_id):
            client.update(User, where={"id": user.id}, data={"last_login_at": utcnow()})
    except TenantContextConflictError:
        # A valid token for another tenant was sent along with the login
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already authenticated for another tenant"
        )
    db.commit()

    # Step 5: Generate JWT token
    access_token = create_access_token(
        user_id=user.id,
        tenant_id=user.tenant_id,
        role=user.role,
        email=user.email
    )

    logger.info("Login succeeded", extra={"user_id": user.id})

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=_get_jwt_expiry_minutes() * 60  # Convert minutes to seconds
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: CurrentUser
):
    """Get current authenticated user information (excludes password_hash)."""
    return MeResponse(
        user=UserResponse.model_validate(current_user)
    )
