"""Recipe SQLAlchemy model"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, Numeric, ForeignKey

from .base import Base, TenantScoped, generate_id, utcnow


class Recipe(TenantScoped, Base):
    """Recipe describing what a production run yields."""
    __tablename__ = "recipe"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(String(36), ForeignKey("category.id"), nullable=True)
    yield_quantity = Column(Numeric(precision=12, scale=3), nullable=False, default=1)
    yield_unit = Column(String(16), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
