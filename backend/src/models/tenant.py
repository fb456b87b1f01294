"""Tenant model - Root entity for multi-tenant isolation"""

from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.orm import validates
import re

from .base import Base, GlobalTable, generate_id, utcnow


class Tenant(GlobalTable, Base):
    """
    Tenant model - Root entity for the multi-tenant system.

    Each tenant represents a distinct bakery/organization with isolated data.
    Every tenant-scoped table references tenant.id through its tenant_id column.
    Tenants are created by administrative operations and never merged or split.
    """
    __tablename__ = "tenant"

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    slug = Column(String(100), nullable=False, unique=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    @validates('slug')
    def validate_slug(self, key, value):
        """
        Ensure slug is URL-friendly and follows naming conventions.

        Pattern: ^[a-z0-9-]+$
        Valid: sunrise-bakery, tenant-123
        Invalid: Sunrise_Bakery, sunrise bakery, sunrise.bakery

        Raises:
            ValueError: If slug doesn't match pattern or length requirements
        """
        if not re.match(r'^[a-z0-9-]+$', value):
            raise ValueError(
                "Slug must contain only lowercase letters, numbers, and hyphens"
            )
        if len(value) < 2 or len(value) > 100:
            raise ValueError("Slug must be between 2 and 100 characters")
        return value

    @validates('name')
    def validate_name(self, key, value):
        """
        Ensure tenant name is not empty and within length limits.

        Raises:
            ValueError: If name is empty/whitespace or exceeds 200 characters
        """
        if not value or len(value.strip()) == 0:
            raise ValueError("Tenant name cannot be empty")
        if len(value) > 200:
            raise ValueError("Tenant name cannot exceed 200 characters")
        return value.strip()

    def __repr__(self):
        return f"<Tenant(id={self.id}, slug='{self.slug}', name='{self.name}')>"
