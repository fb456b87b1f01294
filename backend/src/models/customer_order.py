"""Customer Order model

A customer order moves DRAFT -> CONFIRMED -> FULFILLED, or is CANCELLED before
fulfillment. Order numbers follow ORD-YYYYMM-#### and are sequenced per tenant.
"""

from sqlalchemy import Column, String, Text, Date, DateTime, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from .base import Base, TenantScoped, generate_id, utcnow


class CustomerOrder(TenantScoped, Base):
    """Customer order header.

    The order workflow itself lives in customer_orders.status; this model only
    stores the current status.
    """

    __tablename__ = "customer_order"
    __table_args__ = (
        Index("ix_customer_order_tenant_number", "tenant_id", "order_number", unique=True),
        CheckConstraint(
            "status IN ('DRAFT', 'CONFIRMED', 'FULFILLED', 'CANCELLED')",
            name="ck_customer_order_status"
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    order_number = Column(String(32), nullable=False)
    customer_id = Column(String(36), ForeignKey("customer.id"), nullable=False)
    status = Column(String(16), nullable=False, default="DRAFT")
    expected_delivery_date = Column(Date, nullable=True)
    total_amount = Column(Numeric(precision=12, scale=2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    customer = relationship("Customer", back_populates="orders")

    def __repr__(self):
        return f"<CustomerOrder(id={self.id}, number='{self.order_number}', status='{self.status}')>"
