"""Finished product SQLAlchemy model"""

from sqlalchemy import Column, String, Text, DateTime, Numeric, ForeignKey, Index

from .base import Base, TenantScoped, generate_id, utcnow


class Product(TenantScoped, Base):
    """Finished product batch produced by a tenant and available for sale."""
    __tablename__ = "product"
    __table_args__ = (
        Index("ix_product_tenant_sku", "tenant_id", "sku"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    sku = Column(String(64), nullable=True)
    batch_number = Column(String(64), nullable=True)
    category_id = Column(String(36), ForeignKey("category.id"), nullable=True)
    quantity = Column(Numeric(precision=12, scale=3), nullable=False, default=0)
    unit = Column(String(16), nullable=False)
    sale_price = Column(Numeric(precision=12, scale=2), nullable=True)
    status = Column(String(16), nullable=False, default="IN_STOCK")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
