"""Customer SQLAlchemy model"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, Index
from sqlalchemy.orm import relationship

from .base import Base, TenantScoped, generate_id, utcnow


class Customer(TenantScoped, Base):
    """Customer model representing the businesses a bakery sells to.

    Each customer belongs to one tenant and owns that tenant's customer orders.
    """
    __tablename__ = "customer"
    __table_args__ = (
        Index("ix_customer_tenant_name", "tenant_id", "name"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    email = Column(String(320), nullable=True)
    phone = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    orders = relationship("CustomerOrder", back_populates="customer")
