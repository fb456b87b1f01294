"""Execute Operation descriptions against a SQLAlchemy session.

The executor is the last handler of the data client chain. It performs the
storage call and nothing else: scoping has already been applied by the
middlewares, which is signalled to the ORM listeners through the
tenant_rewritten execution option.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type

from sqlalchemy import func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from .exceptions import InvalidFilterError, UnknownModelError
from .filters import build_criteria, build_order_by, require_unique_selector
from .operations import Action, Operation

logger = logging.getLogger(__name__)

# Execution option telling tenancy.orm_events that criteria are already applied
TENANT_REWRITTEN = "tenant_rewritten"


class SQLAlchemyExecutor:
    """Run operations on a Session.

    Args:
        session: SQLAlchemy session (not committed here; callers own the transaction)
        models: Mapped model classes by name
    """

    def __init__(self, session: Session, models: Mapping[str, Type]):
        self.session = session
        self.models: Dict[str, Type] = dict(models)
        self._handlers = {
            Action.FIND_MANY: self._find_many,
            Action.FIND_FIRST: self._find_first,
            Action.FIND_UNIQUE: self._find_unique,
            Action.COUNT: self._count,
            Action.CREATE: self._create,
            Action.CREATE_MANY: self._create_many,
            Action.UPDATE: self._update,
            Action.UPDATE_MANY: self._update_many,
            Action.DELETE: self._delete,
            Action.DELETE_MANY: self._delete_many,
        }

    def __call__(self, operation: Operation) -> Any:
        model = self.model_for(operation.model)
        return self._handlers[operation.action](model, operation.args)

    def model_for(self, name: str) -> Type:
        try:
            return self.models[name]
        except KeyError:
            raise UnknownModelError(name)

    # ------------------------------------------------------------------ helpers

    def _select(self, model: Type, where: Optional[Mapping[str, Any]]):
        return (
            select(model)
            .where(*build_criteria(model, where))
            .execution_options(**{TENANT_REWRITTEN: True})
        )

    def _check_data(self, model: Type, data: Any) -> Dict[str, Any]:
        if not isinstance(data, Mapping):
            raise InvalidFilterError(f"data for {model.__name__} must be a dict")
        columns = sa_inspect(model).columns
        unknown = [key for key in data if key not in columns]
        if unknown:
            raise InvalidFilterError(f"{model.__name__} has no column(s) {unknown}")
        return dict(data)

    def _one(self, model: Type, where: Optional[Mapping[str, Any]]):
        require_unique_selector(model, where)
        return self.session.scalars(self._select(model, where)).one_or_none()

    def _all(self, model: Type, where: Optional[Mapping[str, Any]]) -> List[Any]:
        return list(self.session.scalars(self._select(model, where)).all())

    # ------------------------------------------------------------------ reads

    def _find_many(self, model: Type, args: Mapping[str, Any]) -> List[Any]:
        stmt = self._select(model, args.get("where"))
        stmt = stmt.order_by(*build_order_by(model, args.get("order_by")))
        if args.get("skip"):
            stmt = stmt.offset(args["skip"])
        if args.get("take") is not None:
            stmt = stmt.limit(args["take"])
        return list(self.session.scalars(stmt).all())

    def _find_first(self, model: Type, args: Mapping[str, Any]) -> Optional[Any]:
        stmt = self._select(model, args.get("where"))
        stmt = stmt.order_by(*build_order_by(model, args.get("order_by"))).limit(1)
        return self.session.scalars(stmt).first()

    def _find_unique(self, model: Type, args: Mapping[str, Any]) -> Optional[Any]:
        return self._one(model, args.get("where"))

    def _count(self, model: Type, args: Mapping[str, Any]) -> int:
        stmt = (
            select(func.count())
            .select_from(model)
            .where(*build_criteria(model, args.get("where")))
            .execution_options(**{TENANT_REWRITTEN: True})
        )
        return self.session.scalar(stmt) or 0

    # ------------------------------------------------------------------ writes

    def _create(self, model: Type, args: Mapping[str, Any]) -> Any:
        instance = model(**self._check_data(model, args.get("data") or {}))
        self.session.add(instance)
        self.session.flush()
        return instance

    def _create_many(self, model: Type, args: Mapping[str, Any]) -> int:
        items: Iterable[Mapping[str, Any]] = args.get("data") or []
        instances = [model(**self._check_data(model, item)) for item in items]
        self.session.add_all(instances)
        self.session.flush()
        return len(instances)

    def _apply(self, instance: Any, data: Mapping[str, Any]) -> None:
        for key, value in data.items():
            setattr(instance, key, value)

    def _update(self, model: Type, args: Mapping[str, Any]) -> Optional[Any]:
        data = self._check_data(model, args.get("data") or {})
        instance = self._one(model, args.get("where"))
        if instance is None:
            return None
        self._apply(instance, data)
        self.session.flush()
        return instance

    def _update_many(self, model: Type, args: Mapping[str, Any]) -> int:
        data = self._check_data(model, args.get("data") or {})
        instances = self._all(model, args.get("where"))
        for instance in instances:
            self._apply(instance, data)
        self.session.flush()
        return len(instances)

    def _delete(self, model: Type, args: Mapping[str, Any]) -> Optional[Any]:
        instance = self._one(model, args.get("where"))
        if instance is None:
            return None
        self.session.delete(instance)
        self.session.flush()
        return instance

    def _delete_many(self, model: Type, args: Mapping[str, Any]) -> int:
        instances = self._all(model, args.get("where"))
        for instance in instances:
            self.session.delete(instance)
        self.session.flush()
        return len(instances)
