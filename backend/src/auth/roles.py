"""User roles and permission hierarchy.

Role Hierarchy (descending permissions):
- ADMIN: Full access within the tenant
- STAFF: Day-to-day operations (customers, orders, production)
- CUSTOM: Tenant-defined role; baseline access only
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles. Values are stored as TEXT and must match exactly."""
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    CUSTOM = "CUSTOM"


# Each role includes permissions of all roles below it
ROLE_HIERARCHY = {
    UserRole.ADMIN: {UserRole.ADMIN, UserRole.STAFF, UserRole.CUSTOM},
    UserRole.STAFF: {UserRole.STAFF, UserRole.CUSTOM},
    UserRole.CUSTOM: {UserRole.CUSTOM},
}


def has_permission(user_role: UserRole, required_role: UserRole) -> bool:
    """Check if user_role satisfies required_role.

    Examples:
        >>> has_permission(UserRole.ADMIN, UserRole.STAFF)
        True
        >>> has_permission(UserRole.CUSTOM, UserRole.STAFF)
        False
    """
    return required_role in ROLE_HIERARCHY.get(user_role, set())
