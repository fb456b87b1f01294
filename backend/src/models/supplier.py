"""Supplier SQLAlchemy model"""

from sqlalchemy import Column, String, Text, Boolean, DateTime

from .base import Base, TenantScoped, generate_id, utcnow


class Supplier(TenantScoped, Base):
    """Supplier of raw materials for one tenant."""
    __tablename__ = "supplier"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    contact_email = Column(String(320), nullable=True)
    phone = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
