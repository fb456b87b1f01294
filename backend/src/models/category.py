"""Category SQLAlchemy model"""

from sqlalchemy import Column, String, Text, DateTime, CheckConstraint

from .base import Base, TenantScoped, generate_id, utcnow


class Category(TenantScoped, Base):
    """Grouping for materials, products and recipes within one tenant."""
    __tablename__ = "category"
    __table_args__ = (
        CheckConstraint(
            "type IN ('RAW_MATERIAL', 'FINISHED_PRODUCT', 'RECIPE')",
            name="ck_category_type"
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    type = Column(String(32), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
