"""Customer orders module: order numbering, status workflow and API"""

from .status import CustomerOrderStatus, StateTransitionError
from .router import router

__all__ = [
    "CustomerOrderStatus",
    "StateTransitionError",
    "router",
]
