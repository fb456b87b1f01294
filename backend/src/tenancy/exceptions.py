"""Exceptions raised by the tenant isolation layer.

Scoping decisions themselves never raise (a foreign row is reported as "not
found"); these errors signal misuse of the context or a misconfigured registry.
"""


class TenantIsolationError(Exception):
    """Base class for tenant isolation errors."""
    pass


class TenantContextConflictError(TenantIsolationError):
    """Raised when a unit of work tries to switch to a different tenant."""

    def __init__(self, bound_tenant: str, requested_tenant: str):
        self.bound_tenant = bound_tenant
        self.requested_tenant = requested_tenant
        super().__init__(
            f"Unit of work is already bound to tenant '{bound_tenant}', "
            f"cannot rebind to '{requested_tenant}'"
        )


class UnclassifiedModelError(TenantIsolationError):
    """Raised when a mapped model is neither TenantScoped nor GlobalTable."""

    def __init__(self, model_names: list[str]):
        self.model_names = sorted(model_names)
        super().__init__(
            "Models must inherit exactly one of TenantScoped or GlobalTable: "
            + ", ".join(self.model_names)
        )


class RegistryMismatchError(TenantIsolationError):
    """Raised when the static tenant model list disagrees with the mapped models."""

    def __init__(self, missing: set[str], unexpected: set[str]):
        self.missing = missing
        self.unexpected = unexpected
        super().__init__(
            f"Tenant registry out of date. Scoped models missing from "
            f"TENANT_SCOPED_MODELS: {sorted(missing)}; listed but not "
            f"TenantScoped: {sorted(unexpected)}"
        )
