"""CustomerOrder status state machine.

State Flow:
    DRAFT → CONFIRMED → FULFILLED

Any non-terminal order can be CANCELLED.

Terminal States: FULFILLED, CANCELLED
"""

from enum import Enum
from typing import List


class CustomerOrderStatus(str, Enum):
    """Customer order status enumeration."""
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    FULFILLED = "FULFILLED"
    CANCELLED = "CANCELLED"


ALLOWED_TRANSITIONS = {
    CustomerOrderStatus.DRAFT: [
        CustomerOrderStatus.CONFIRMED,
        CustomerOrderStatus.CANCELLED
    ],
    CustomerOrderStatus.CONFIRMED: [
        CustomerOrderStatus.FULFILLED,
        CustomerOrderStatus.CANCELLED
    ],
    CustomerOrderStatus.FULFILLED: [],  # Terminal state
    CustomerOrderStatus.CANCELLED: [],  # Terminal state
}


class StateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


def get_allowed_transitions(status: CustomerOrderStatus) -> List[CustomerOrderStatus]:
    return ALLOWED_TRANSITIONS.get(status, [])


def can_transition(
    current_status: CustomerOrderStatus,
    new_status: CustomerOrderStatus
) -> bool:
    """Check if a state transition is allowed without raising exception."""
    return new_status in get_allowed_transitions(current_status)


def validate_transition(
    current_status: CustomerOrderStatus,
    new_status: CustomerOrderStatus
) -> None:
    """Validate that a state transition is allowed.

    Raises:
        StateTransitionError: If transition is not allowed
    """
    if not can_transition(current_status, new_status):
        allowed = get_allowed_transitions(current_status)
        raise StateTransitionError(
            f"Invalid transition: {current_status.value} -> {new_status.value}. "
            f"Allowed transitions from {current_status.value}: "
            f"{[s.value for s in allowed]}"
        )
