"""Shared reference data: permission catalog and units of measure.

These tables carry no tenant_id; every tenant reads the same rows.
"""

from sqlalchemy import Column, String, Text, UniqueConstraint

from .base import Base, GlobalTable, generate_id


class Permission(GlobalTable, Base):
    """Permission catalog entry (resource + action)."""
    __tablename__ = "permission"
    __table_args__ = (
        UniqueConstraint("resource", "action", name="uq_permission_resource_action"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    resource = Column(String(64), nullable=False)
    action = Column(String(32), nullable=False)
    description = Column(Text, nullable=True)


class UnitOfMeasure(GlobalTable, Base):
    """Unit of measure (kg, g, L, pcs, ...)."""
    __tablename__ = "unit_of_measure"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    symbol = Column(String(16), nullable=False, unique=True)
    category = Column(String(32), nullable=False)
