"""Quality status SQLAlchemy model"""

from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime

from .base import Base, TenantScoped, generate_id, utcnow


class QualityStatus(TenantScoped, Base):
    """Tenant-defined quality label applied to raw materials."""
    __tablename__ = "quality_status"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(16), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
