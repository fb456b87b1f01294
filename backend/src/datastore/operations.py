"""Operation descriptions passed through the data client middleware chain.

An Operation is a plain value: middlewares (such as tenant isolation) return
rewritten copies instead of mutating the caller's dicts.
"""

import copy
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Optional


class Action(str, Enum):
    """Data operation kinds."""
    FIND_MANY = "find_many"
    FIND_FIRST = "find_first"
    FIND_UNIQUE = "find_unique"
    COUNT = "count"
    CREATE = "create"
    CREATE_MANY = "create_many"
    UPDATE = "update"
    UPDATE_MANY = "update_many"
    DELETE = "delete"
    DELETE_MANY = "delete_many"


READ_ACTIONS = frozenset({Action.FIND_MANY, Action.FIND_FIRST, Action.COUNT})
CREATE_ACTIONS = frozenset({Action.CREATE, Action.CREATE_MANY})
WRITE_ACTIONS = frozenset({
    Action.UPDATE,
    Action.UPDATE_MANY,
    Action.DELETE,
    Action.DELETE_MANY,
})


@dataclass(frozen=True)
class Operation:
    """A single data-store operation.

    Attributes:
        model: Mapped model class name (e.g. "CustomerOrder")
        action: Operation kind
        args: where / data / order_by / skip / take, depending on action
    """
    model: str
    action: Action
    args: Dict[str, Any] = field(default_factory=dict)

    @property
    def where(self) -> Optional[Dict[str, Any]]:
        return self.args.get("where")

    @property
    def data(self) -> Any:
        return self.args.get("data")

    def with_args(self, **changes: Any) -> "Operation":
        """Return a copy with args deep-copied and updated."""
        args = copy.deepcopy(self.args)
        args.update(changes)
        return replace(self, args=args)


# A handler executes an operation; a middleware wraps the next handler.
Handler = Callable[[Operation], Any]
Middleware = Callable[[Operation, Handler], Any]
