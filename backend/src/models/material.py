"""Raw material SQLAlchemy model"""

from sqlalchemy import Column, String, Text, Date, DateTime, Numeric, ForeignKey, Index

from .base import Base, TenantScoped, generate_id, utcnow


class Material(TenantScoped, Base):
    """Raw material batch held in stock (flour, butter, ...).

    Each batch belongs to one tenant and references that tenant's category,
    supplier, storage location and quality status.
    """
    __tablename__ = "material"
    __table_args__ = (
        Index("ix_material_tenant_sku", "tenant_id", "sku"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    sku = Column(String(64), nullable=True)
    batch_number = Column(String(64), nullable=False)
    category_id = Column(String(36), ForeignKey("category.id"), nullable=True)
    supplier_id = Column(String(36), ForeignKey("supplier.id"), nullable=True)
    storage_location_id = Column(String(36), ForeignKey("storage_location.id"), nullable=True)
    quality_status_id = Column(String(36), ForeignKey("quality_status.id"), nullable=True)
    quantity = Column(Numeric(precision=12, scale=3), nullable=False, default=0)
    unit = Column(String(16), nullable=False)
    unit_price = Column(Numeric(precision=12, scale=4), nullable=True)
    expiration_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
