"""Bearer tokens for bakery staff.

A token names the user (sub) and, more importantly, the tenant the user
belongs to. TenantContextMiddleware binds that tenant_id claim as the active
tenant for the request, so decoding insists on it being present.

Signing is HS256 with JWT_SECRET. Lifetime is JWT_EXPIRY_MINUTES (60 when
unset or not a number). Both are read from the environment on every call.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

ALGORITHM = "HS256"
DEFAULT_EXPIRY_MINUTES = 60

# Claims a token must carry to be accepted at all
REQUIRED_CLAIMS = ("sub", "tenant_id", "exp")


def _get_jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise ValueError("JWT_SECRET environment variable is not set")
    return secret


def _get_jwt_expiry_minutes() -> int:
    try:
        return int(os.getenv("JWT_EXPIRY_MINUTES", DEFAULT_EXPIRY_MINUTES))
    except ValueError:
        return DEFAULT_EXPIRY_MINUTES


def build_claims(
    user_id: str,
    tenant_id: str,
    role: str,
    email: str,
    issued_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Assemble the payload for a user's access token.

    iat and exp are integer Unix timestamps; exp is issued_at plus the
    configured lifetime.
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=_get_jwt_expiry_minutes())
    return {
        "sub": str(user_id),
        "tenant_id": str(tenant_id),
        "role": role,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }


def create_access_token(user_id: str, tenant_id: str, role: str, email: str) -> str:
    """Sign an access token for the given user.

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    claims = build_claims(user_id, tenant_id, role, email)
    return jwt.encode(claims, _get_jwt_secret(), algorithm=ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Verify a token's signature and expiry and return its claims.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is malformed, tampered with or
            lacks one of REQUIRED_CLAIMS
        ValueError: If JWT_SECRET is not set
    """
    try:
        return jwt.decode(
            token,
            _get_jwt_secret(),
            algorithms=[ALGORITHM],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError:
        raise
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {e}") from e
