"""Base SQLAlchemy declarative base and tenancy classification mixins.

Every mapped model must inherit exactly one of:

- TenantScoped: the table carries a tenant_id column and is isolated per tenant
- GlobalTable: shared reference data (tenant root, catalogs) with no tenant_id

tenancy.registry.verify_model_classification() enforces this at startup.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import declarative_base, declared_attr


def generate_id() -> str:
    """Generate a primary key value (UUID v4 as string)."""
    return str(uuid4())


def utcnow() -> datetime:
    """Timezone-aware current time, used for created_at/updated_at defaults."""
    return datetime.now(timezone.utc)


class TenantScoped:
    """Marker mixin for tables isolated per tenant.

    Declares tenant_id as NOT NULL foreign key to tenant.id. The value is
    stamped by the data client (or the before_flush listener) at creation
    and is never reassigned afterwards.
    """

    __tenant_scoped__ = True

    @declared_attr
    def tenant_id(cls):
        return Column(
            String(64),
            ForeignKey("tenant.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )


class GlobalTable:
    """Marker mixin for shared tables without a tenant column."""

    __tenant_scoped__ = False


Base = declarative_base()


def mapped_models(base=Base) -> dict:
    """Return all classes mapped on a declarative base, keyed by class name."""
    return {mapper.class_.__name__: mapper.class_ for mapper in base.registry.mappers}
