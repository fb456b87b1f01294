"""Storage location SQLAlchemy model"""

from sqlalchemy import Column, String, Text, DateTime

from .base import Base, TenantScoped, generate_id, utcnow


class StorageLocation(TenantScoped, Base):
    """Physical storage place (freezer, dry store, ...) of one tenant."""
    __tablename__ = "storage_location"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
