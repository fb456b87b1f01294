"""Pydantic schemas for the Customer Orders API"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict

from .status import CustomerOrderStatus


class CustomerOrderCreate(BaseModel):
    """Schema for POST /customer-orders.

    order_number and status are assigned by the server. Unknown fields
    (including tenant_id) are ignored.
    """
    customer_id: str = Field(..., min_length=1)
    expected_delivery_date: Optional[date] = None
    total_amount: Decimal = Field(Decimal("0"), ge=0)
    notes: Optional[str] = None


class CustomerOrderStatusUpdate(BaseModel):
    """Schema for PATCH /customer-orders/{id}/status"""
    status: CustomerOrderStatus

    model_config = ConfigDict(extra='forbid')


class CustomerOrderResponse(BaseModel):
    """Response schema for a customer order"""
    id: str
    tenant_id: str
    order_number: str
    customer_id: str
    status: CustomerOrderStatus
    expected_delivery_date: Optional[date] = None
    total_amount: Decimal
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CustomerOrderListResponse(BaseModel):
    """Paginated customer order list"""
    items: List[CustomerOrderResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
