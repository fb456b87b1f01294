"""Customer Orders API endpoints

GET    /customer-orders                 list (filters: status, customer_id)
GET    /customer-orders/{id}            detail
POST   /customer-orders                 create (DRAFT, numbered ORD-YYYYMM-####)
PATCH  /customer-orders/{id}/status     status transition
DELETE /customer-orders/{id}            delete a DRAFT order

Orders of another tenant answer 404.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from auth.dependencies import get_current_user, require_role
from auth.roles import UserRole
from database import get_db, get_data_client
from datastore.client import DataClient
from dependencies import get_or_404, require_tenant_context
from models.customer_order import CustomerOrder
from models.user import User
from . import service
from .schemas import (
    CustomerOrderCreate,
    CustomerOrderListResponse,
    CustomerOrderResponse,
    CustomerOrderStatusUpdate,
)
from .status import CustomerOrderStatus, StateTransitionError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/customer-orders",
    tags=["Customer Orders"],
    dependencies=[Depends(require_tenant_context)],
)


@router.get("", response_model=CustomerOrderListResponse)
async def list_customer_orders(
    status_filter: Optional[CustomerOrderStatus] = Query(None, alias="status"),
    customer_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(get_current_user)
):
    """List the tenant's customer orders, newest first."""
    where = {}
    if status_filter is not None:
        where["status"] = status_filter.value
    if customer_id:
        where["customer_id"] = customer_id

    total = client.count(CustomerOrder, where=where)
    orders = client.find_many(
        CustomerOrder,
        where=where,
        order_by=[{"created_at": "desc"}, {"order_number": "desc"}],
        skip=(page - 1) * per_page,
        take=per_page,
    )

    return CustomerOrderListResponse(
        items=[CustomerOrderResponse.model_validate(o) for o in orders],
        total=total,
        page=page,
        per_page=per_page,
        total_pages=(total + per_page - 1) // per_page if total > 0 else 0,
    )


@router.get("/{order_id}", response_model=CustomerOrderResponse)
async def get_customer_order(
    order_id: str,
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(get_current_user)
):
    """Get a single customer order (404 if missing or another tenant's)."""
    order = get_or_404(client, CustomerOrder, order_id, detail="Customer order not found")
    return CustomerOrderResponse.model_validate(order)


@router.post("", response_model=CustomerOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_customer_order(
    order_data: CustomerOrderCreate,
    db: Session = Depends(get_db),
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(require_role(UserRole.STAFF))
):
    """Create a DRAFT order for one of the tenant's customers.

    Raises:
        HTTPException 404: If the customer is unknown in this tenant
    """
    try:
        order = service.create_order(client, order_data.model_dump())
    except service.CustomerNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )
    db.commit()
    db.refresh(order)

    return CustomerOrderResponse.model_validate(order)


@router.patch("/{order_id}/status", response_model=CustomerOrderResponse)
async def update_customer_order_status(
    order_id: str,
    update: CustomerOrderStatusUpdate,
    db: Session = Depends(get_db),
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(require_role(UserRole.STAFF))
):
    """Transition an order to a new status.

    Raises:
        HTTPException 404: If order not found
        HTTPException 409: If the transition is not allowed
    """
    order = get_or_404(client, CustomerOrder, order_id, detail="Customer order not found")

    try:
        order = service.change_status(client, order, update.status)
    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    db.commit()
    db.refresh(order)

    logger.info(
        f"Customer order {order.order_number} moved to {order.status}",
        extra={"order_id": order.id, "user_id": current_user.id}
    )
    return CustomerOrderResponse.model_validate(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer_order(
    order_id: str,
    db: Session = Depends(get_db),
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(require_role(UserRole.STAFF))
):
    """Delete a DRAFT order.

    Raises:
        HTTPException 404: If order not found
        HTTPException 409: If the order is not a draft
    """
    order = get_or_404(client, CustomerOrder, order_id, detail="Customer order not found")

    try:
        service.delete_order(client, order)
    except service.OrderNotDeletableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
