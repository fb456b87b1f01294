"""Pydantic schemas for authentication endpoints"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional


class LoginRequest(BaseModel):
    """Request schema for user login.

    No tenant is supplied: the user is looked up by email across all
    tenants and the token carries the user's tenant.

    Attributes:
        email: User's email address
        password: User's password (plain text, will be verified against hash)
    """
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response schema for successful login.

    Attributes:
        access_token: JWT access token
        token_type: Token type (always "bearer")
        expires_in: Token expiry in seconds
    """
    access_token: str
    token_type: str = "bearer"
    expires_in: int = 3600


class TokenPayload(BaseModel):
    """Decoded JWT token payload."""
    sub: str  # user_id
    tenant_id: str
    role: str
    email: str
    exp: int
    iat: int


class UserResponse(BaseModel):
    """User information response (excludes password_hash)."""
    id: str
    tenant_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    last_login_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MeResponse(BaseModel):
    """Response schema for GET /auth/me endpoint."""
    user: UserResponse
