"""Tenant registry - which entity kinds are isolated per tenant.

TENANT_SCOPED_MODELS is the versioned list of tenant-scoped model names. It is
cross-checked against the TenantScoped/GlobalTable mixins on every mapped
model, so adding a model without classifying it (or without updating this
list) fails at startup instead of silently skipping isolation.
"""

import logging
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Type

from models.base import GlobalTable, TenantScoped, mapped_models
from .exceptions import RegistryMismatchError, UnclassifiedModelError

logger = logging.getLogger(__name__)


# Registry version 1. Update together with the model's TenantScoped mixin.
TENANT_SCOPED_MODELS: FrozenSet[str] = frozenset({
    "User",
    "Material",
    "Product",
    "Recipe",
    "ProductionRun",
    "Customer",
    "CustomerOrder",
    "Category",
    "Supplier",
    "StorageLocation",
    "QualityStatus",
})


class TenantRegistry:
    """Closed set of tenant-scoped model kinds.

    Holds the scoped model classes by name; the interceptor asks is_scoped()
    for every operation and passes everything else through unmodified.
    """

    def __init__(self, scoped_models: Mapping[str, Type]):
        self._scoped: Dict[str, Type] = dict(scoped_models)

    @classmethod
    def from_base(cls, base) -> "TenantRegistry":
        """Build a registry from the TenantScoped mixin of mapped models."""
        return cls({
            name: model
            for name, model in mapped_models(base).items()
            if issubclass(model, TenantScoped)
        })

    @property
    def names(self) -> FrozenSet[str]:
        return frozenset(self._scoped)

    def is_scoped(self, model_name: Optional[str]) -> bool:
        return model_name in self._scoped

    def model_for(self, model_name: str) -> Optional[Type]:
        return self._scoped.get(model_name)

    def __contains__(self, model_name: object) -> bool:
        return model_name in self._scoped

    def __repr__(self) -> str:
        return f"TenantRegistry({sorted(self._scoped)})"


def verify_model_classification(
    base,
    expected: Iterable[str] = TENANT_SCOPED_MODELS
) -> TenantRegistry:
    """Check that every mapped model is classified and the list is current.

    Args:
        base: Declarative base whose mapped models are checked
        expected: Static list of tenant-scoped model names

    Returns:
        TenantRegistry: Registry derived from the mixins

    Raises:
        UnclassifiedModelError: If a model inherits neither or both mixins
        RegistryMismatchError: If expected differs from the TenantScoped models
    """
    unclassified = [
        name
        for name, model in mapped_models(base).items()
        if issubclass(model, TenantScoped) == issubclass(model, GlobalTable)
    ]
    if unclassified:
        raise UnclassifiedModelError(unclassified)

    registry = TenantRegistry.from_base(base)
    expected = frozenset(expected)
    missing = registry.names - expected
    unexpected = expected - registry.names
    if missing or unexpected:
        raise RegistryMismatchError(missing=set(missing), unexpected=set(unexpected))

    logger.info(f"Tenant isolation models: {sorted(registry.names)}")
    return registry


@lru_cache()
def get_tenant_registry() -> TenantRegistry:
    """Verified registry for the application's models (cached)."""
    import models  # noqa: F401  (registers every mapped class on Base)
    from models.base import Base

    return verify_model_classification(Base)
