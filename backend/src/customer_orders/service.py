"""Customer order business logic.

Functions here take a tenant-isolated DataClient; none of them filter by
tenant themselves.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from datastore.client import DataClient
from models.customer import Customer
from models.customer_order import CustomerOrder
from .status import CustomerOrderStatus, validate_transition

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "ORD"
SEQUENCE_DIGITS = 4


class CustomerNotFoundError(Exception):
    """The referenced customer does not exist in the active tenant."""
    pass


class OrderNotDeletableError(Exception):
    """Only DRAFT orders can be deleted."""
    pass


def order_number_prefix(now: Optional[datetime] = None) -> str:
    """Return the ORD-YYYYMM- prefix for orders created at now."""
    now = now or datetime.now(timezone.utc)
    return f"{ORDER_NUMBER_PREFIX}-{now:%Y%m}-"


def next_order_number(client: DataClient, now: Optional[datetime] = None) -> str:
    """Generate the next order number for the active tenant.

    Sequences restart every month and are independent per tenant: the lookup
    of the latest number for the month goes through the scoped client.

    Example:
        ORD-202601-0001, ORD-202601-0002, ... ORD-202602-0001
    """
    prefix = order_number_prefix(now)
    latest = client.find_first(
        CustomerOrder,
        where={"order_number": {"startswith": prefix}},
        order_by={"order_number": "desc"},
    )

    sequence = 1
    if latest is not None:
        try:
            sequence = int(latest.order_number[len(prefix):]) + 1
        except ValueError:
            logger.warning(f"Unparseable order number {latest.order_number!r}, restarting sequence")

    return f"{prefix}{sequence:0{SEQUENCE_DIGITS}d}"


def create_order(client: DataClient, payload: Dict[str, Any]) -> CustomerOrder:
    """Create a DRAFT order for a customer of the active tenant.

    Raises:
        CustomerNotFoundError: If customer_id is unknown in the active tenant
    """
    customer = client.find_unique(Customer, where={"id": payload["customer_id"]})
    if customer is None:
        raise CustomerNotFoundError(payload["customer_id"])

    data = dict(payload)
    data["order_number"] = next_order_number(client)
    data["status"] = CustomerOrderStatus.DRAFT.value

    order = client.create(CustomerOrder, data=data)
    logger.info(f"Created customer order {order.order_number}", extra={"order_id": order.id})
    return order


def change_status(
    client: DataClient,
    order: CustomerOrder,
    new_status: CustomerOrderStatus
) -> CustomerOrder:
    """Move order to new_status.

    Raises:
        StateTransitionError: If the transition is not allowed
    """
    validate_transition(CustomerOrderStatus(order.status), new_status)
    return client.update(
        CustomerOrder,
        where={"id": order.id},
        data={"status": new_status.value},
    )


def delete_order(client: DataClient, order: CustomerOrder) -> None:
    """Delete a DRAFT order.

    Raises:
        OrderNotDeletableError: If the order is no longer a draft
    """
    if order.status != CustomerOrderStatus.DRAFT.value:
        raise OrderNotDeletableError(
            f"Only DRAFT orders can be deleted (order is {order.status})"
        )
    client.delete(CustomerOrder, where={"id": order.id})
