"""Production run SQLAlchemy model"""

from sqlalchemy import Column, String, Text, DateTime, Numeric, ForeignKey, CheckConstraint

from .base import Base, TenantScoped, generate_id, utcnow


class ProductionRun(TenantScoped, Base):
    """One execution of a recipe.

    Status: PLANNED -> IN_PROGRESS -> COMPLETED, or CANCELLED.
    """
    __tablename__ = "production_run"
    __table_args__ = (
        CheckConstraint(
            "status IN ('PLANNED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED')",
            name="ck_production_run_status"
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    recipe_id = Column(String(36), ForeignKey("recipe.id"), nullable=False)
    target_quantity = Column(Numeric(precision=12, scale=3), nullable=False)
    target_unit = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False, default="PLANNED")
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
