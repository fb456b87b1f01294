"""Post-read validation for read-one-by-unique-key operations.

find_unique is keyed by global identifiers (primary key, login email), so it
cannot be filtered in advance without breaking legitimate global lookups.
Instead the returned row is compared with the active tenant afterwards.
"""

from typing import Any, Optional

from datastore.results import ReadOutcome
from .registry import TenantRegistry

TENANT_FIELD = "tenant_id"


def validate_unique_read(
    model_name: str,
    record: Any,
    active_tenant: Optional[str],
    registry: TenantRegistry,
) -> ReadOutcome:
    """Classify a find_unique result against the active tenant.

    Args:
        model_name: Model the read targeted
        record: Row returned by storage (or None)
        active_tenant: Tenant of the current unit of work, None if unset
        registry: Tenant registry

    Returns:
        ReadOutcome: NOT_FOUND if nothing was read, FORBIDDEN if the row
        belongs to another tenant, FOUND otherwise. With no active tenant
        (pre-authentication) every row is FOUND.
    """
    if record is None:
        return ReadOutcome.not_found()
    if active_tenant is None or not registry.is_scoped(model_name):
        return ReadOutcome.found(record)
    if getattr(record, TENANT_FIELD, None) != active_tenant:
        return ReadOutcome.forbidden()
    return ReadOutcome.found(record)
