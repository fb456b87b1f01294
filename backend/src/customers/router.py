"""Customer management API endpoints

All storage goes through the tenant-isolated DataClient: handlers never add
tenant filters themselves, and a customer of another tenant reads as 404.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from auth.dependencies import get_current_user, require_role
from auth.roles import UserRole
from database import get_db, get_data_client
from datastore.client import DataClient
from dependencies import get_or_404, require_tenant_context
from models.customer import Customer
from models.user import User
from .schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/customers",
    tags=["customers"],
    dependencies=[Depends(require_tenant_context)],
)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(require_role(UserRole.STAFF))
):
    """Create a new customer in the caller's tenant."""
    customer = client.create(Customer, data=customer_data.model_dump())
    db.commit()
    db.refresh(customer)

    logger.info(f"Created customer {customer.id}", extra={"user_id": current_user.id})
    return CustomerResponse.model_validate(customer)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    q: Optional[str] = Query(None, description="Search customer names"),
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(50, ge=1, le=100, description="Items per page"),
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(get_current_user)
):
    """
    List customers with pagination and search/filter.

    Args:
        q: Case-sensitive substring of the customer name
        is_active: Only active (True) or inactive (False) customers
        page: Page number (1-indexed)
        per_page: Items per page (max 100)

    Returns:
        Paginated list of the tenant's customers
    """
    where = {}
    if q:
        where["name"] = {"contains": q}
    if is_active is not None:
        where["is_active"] = is_active

    total = client.count(Customer, where=where)
    customers = client.find_many(
        Customer,
        where=where,
        order_by={"name": "asc"},
        skip=(page - 1) * per_page,
        take=per_page,
    )

    total_pages = (total + per_page - 1) // per_page if total > 0 else 0

    return CustomerListResponse(
        items=[CustomerResponse.model_validate(c) for c in customers],
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages
    )


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(get_current_user)
):
    """
    Get a single customer by ID.

    Raises:
        HTTPException 404: If customer not found or belongs to a different tenant
    """
    customer = get_or_404(client, Customer, customer_id, detail="Customer not found")
    return CustomerResponse.model_validate(customer)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db),
    client: DataClient = Depends(get_data_client),
    current_user: User = Depends(require_role(UserRole.STAFF))
):
    """Update a customer (partial update)."""
    get_or_404(client, Customer, customer_id, detail="Customer not found")

    changes = customer_data.model_dump(exclude_unset=True)
    customer = client.update(Customer, where={"id": customer_id}, data=changes)
    db.commit()
    db.refresh(customer)

    return CustomerResponse.model_validate(customer)
