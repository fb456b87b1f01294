"""Data client - the single entry point feature code uses for storage.

DataClient describes every call as an Operation and runs it through a chain
of middlewares before the SQLAlchemy executor performs it:

    client = DataClient(session)
    setup_tenant_isolation(client)
    orders = client.find_many(CustomerOrder, where={"status": "DRAFT"})

Middlewares are callables ``(operation, call_next) -> result``; the first one
registered with use() runs outermost.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, Union

from sqlalchemy.orm import Session

from models.base import mapped_models
from .executor import SQLAlchemyExecutor
from .operations import Action, Handler, Middleware, Operation
from .results import ReadOutcome

logger = logging.getLogger(__name__)

ModelRef = Union[str, Type]


def _model_name(model: ModelRef) -> str:
    return model if isinstance(model, str) else model.__name__


def _compact(**args: Any) -> Dict[str, Any]:
    return {key: value for key, value in args.items() if value is not None}


class DataClient:
    """Prisma-style facade over a SQLAlchemy session.

    Args:
        session: SQLAlchemy session; the client flushes but never commits
        models: Mapped classes by name (default: every model on models.Base)
    """

    def __init__(self, session: Session, models: Optional[Mapping[str, Type]] = None):
        if models is None:
            import models as _models  # noqa: F401  (register all mappers)
            models = mapped_models(_models.Base)

        self.session = session
        self._executor = SQLAlchemyExecutor(session, models)
        self._middlewares: List[Middleware] = []

    @property
    def middlewares(self) -> Sequence[Middleware]:
        return tuple(self._middlewares)

    def use(self, middleware: Middleware) -> "DataClient":
        """Register a middleware around every operation."""
        self._middlewares.append(middleware)
        return self

    def execute(self, operation: Operation) -> Any:
        """Run an operation through the middleware chain and the executor."""
        handler: Handler = self._executor
        for middleware in reversed(self._middlewares):
            handler = _wrap(middleware, handler)
        return handler(operation)

    def _run(self, model: ModelRef, action: Action, **args: Any) -> Any:
        return self.execute(Operation(_model_name(model), action, _compact(**args)))

    # Reads

    def find_many(
        self,
        model: ModelRef,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Any = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> List[Any]:
        return self._run(model, Action.FIND_MANY, where=where, order_by=order_by, skip=skip, take=take)

    def find_first(
        self,
        model: ModelRef,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Any = None,
    ) -> Optional[Any]:
        return self._run(model, Action.FIND_FIRST, where=where, order_by=order_by)

    def find_unique_outcome(self, model: ModelRef, where: Mapping[str, Any]) -> ReadOutcome:
        """Read one row by a unique key and return the tagged outcome."""
        return ReadOutcome.of(self._run(model, Action.FIND_UNIQUE, where=where))

    def find_unique(self, model: ModelRef, where: Mapping[str, Any]) -> Optional[Any]:
        """Read one row by a unique key; rows of another tenant read as None."""
        return self.find_unique_outcome(model, where).visible_record()

    def count(self, model: ModelRef, where: Optional[Mapping[str, Any]] = None) -> int:
        return self._run(model, Action.COUNT, where=where)

    # Writes

    def create(self, model: ModelRef, data: Mapping[str, Any]) -> Any:
        return self._run(model, Action.CREATE, data=dict(data))

    def create_many(self, model: ModelRef, data: Sequence[Mapping[str, Any]]) -> int:
        return self._run(model, Action.CREATE_MANY, data=[dict(item) for item in data])

    def update(self, model: ModelRef, where: Mapping[str, Any], data: Mapping[str, Any]) -> Optional[Any]:
        return self._run(model, Action.UPDATE, where=where, data=dict(data))

    def update_many(self, model: ModelRef, where: Optional[Mapping[str, Any]], data: Mapping[str, Any]) -> int:
        return self._run(model, Action.UPDATE_MANY, where=where, data=dict(data))

    def delete(self, model: ModelRef, where: Mapping[str, Any]) -> Optional[Any]:
        return self._run(model, Action.DELETE, where=where)

    def delete_many(self, model: ModelRef, where: Optional[Mapping[str, Any]] = None) -> int:
        return self._run(model, Action.DELETE_MANY, where=where)


def _wrap(middleware: Middleware, call_next: Handler) -> Handler:
    def handler(operation: Operation) -> Any:
        return middleware(operation, call_next)
    return handler
