"""Password hashing and verification using Argon2id

Passwords are combined with a server-side PASSWORD_PEPPER before hashing.
Cost parameters default to the OWASP recommendation (64 MB, 3 iterations,
parallelism 4) and can be lowered through ARGON2_MEMORY_COST /
ARGON2_TIME_COST for test runs.
"""

import os
from functools import lru_cache
from argon2 import PasswordHasher, Type
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError


@lru_cache()
def _get_hasher() -> PasswordHasher:
    return PasswordHasher(
        memory_cost=int(os.getenv('ARGON2_MEMORY_COST', '65536')),
        time_cost=int(os.getenv('ARGON2_TIME_COST', '3')),
        parallelism=4,
        hash_len=32,
        salt_len=16,
        type=Type.ID
    )


def _get_pepper() -> str:
    """Get PASSWORD_PEPPER from environment.

    Raises:
        ValueError: If PASSWORD_PEPPER is not set
    """
    pepper = os.getenv('PASSWORD_PEPPER')
    if not pepper:
        raise ValueError("PASSWORD_PEPPER environment variable is not set")
    return pepper


def hash_password(password: str) -> str:
    """Hash a password using Argon2id with global pepper.

    Raises:
        ValueError: If PASSWORD_PEPPER is not set or password is empty
    """
    if not password:
        raise ValueError("Password cannot be empty")

    return _get_hasher().hash(password + _get_pepper())


def verify_password(password: str, hash: str) -> bool:
    """Verify a password against an Argon2id hash.

    Returns:
        bool: True if password matches hash, False otherwise
    """
    if not password or not hash:
        return False

    try:
        _get_hasher().verify(hash, password + _get_pepper())
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False
