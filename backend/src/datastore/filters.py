"""Translate where/order_by dicts into SQLAlchemy criteria.

Filter language:

    {"status": "DRAFT"}                          equality
    {"notes": None}                              IS NULL
    {"order_number": {"startswith": "ORD-"}}     operator dict
    {"OR": [{"status": "DRAFT"}, {...}]}         logical AND / OR / NOT

Operators: equals, not, in, not_in, lt, lte, gt, gte, contains, startswith,
endswith.
"""

from typing import Any, FrozenSet, List, Mapping, Set, Type

from sqlalchemy import and_, or_, true, UniqueConstraint
from sqlalchemy import inspect as sa_inspect

from .exceptions import InvalidFilterError

LOGICAL_KEYS = frozenset({"AND", "OR", "NOT"})

_OPERATORS = {
    "equals": lambda col, v: col.is_(None) if v is None else col == v,
    "not": lambda col, v: col.is_not(None) if v is None else col != v,
    "in": lambda col, v: col.in_(list(v)),
    "not_in": lambda col, v: col.not_in(list(v)),
    "lt": lambda col, v: col < v,
    "lte": lambda col, v: col <= v,
    "gt": lambda col, v: col > v,
    "gte": lambda col, v: col >= v,
    "contains": lambda col, v: col.contains(v, autoescape=True),
    "startswith": lambda col, v: col.startswith(v, autoescape=True),
    "endswith": lambda col, v: col.endswith(v, autoescape=True),
}


def _column(model: Type, key: str):
    if key not in sa_inspect(model).columns:
        raise InvalidFilterError(f"{model.__name__} has no column '{key}'")
    return getattr(model, key)


def _conjunction(criteria: List[Any]):
    return and_(*criteria) if criteria else true()


def _column_criteria(model: Type, key: str, value: Any) -> List[Any]:
    column = _column(model, key)

    if not isinstance(value, Mapping):
        return [column.is_(None) if value is None else column == value]

    criteria = []
    for op, operand in value.items():
        if op not in _OPERATORS:
            raise InvalidFilterError(f"Unknown filter operator '{op}' on '{key}'")
        criteria.append(_OPERATORS[op](column, operand))
    return criteria


def build_criteria(model: Type, where: Mapping[str, Any] | None) -> List[Any]:
    """Build a list of SQLAlchemy criteria (implicitly AND-ed) from a where dict.

    Args:
        model: Mapped model class
        where: Filter dict (None or {} means no constraint)

    Returns:
        list: Criteria for Select.where(*criteria)

    Raises:
        InvalidFilterError: On unknown columns, operators or malformed filters
    """
    if not where:
        return []
    if not isinstance(where, Mapping):
        raise InvalidFilterError(f"where must be a dict, got {type(where).__name__}")

    criteria: List[Any] = []
    for key, value in where.items():
        if key == "AND":
            criteria.extend(_conjunction(build_criteria(model, item)) for item in value)
        elif key == "OR":
            criteria.append(or_(*[_conjunction(build_criteria(model, item)) for item in value]))
        elif key == "NOT":
            criteria.append(~_conjunction(build_criteria(model, value)))
        else:
            criteria.extend(_column_criteria(model, key, value))
    return criteria


def build_order_by(model: Type, order_by: Any) -> List[Any]:
    """Build ORDER BY clauses from {"column": "asc"|"desc"} or a list of them."""
    if not order_by:
        return []
    items = order_by if isinstance(order_by, list) else [order_by]

    clauses = []
    for item in items:
        for key, direction in item.items():
            column = _column(model, key)
            if direction == "asc":
                clauses.append(column.asc())
            elif direction == "desc":
                clauses.append(column.desc())
            else:
                raise InvalidFilterError(f"Invalid sort direction '{direction}' for '{key}'")
    return clauses


def unique_key_sets(model: Type) -> List[FrozenSet[str]]:
    """Column-name sets that identify at most one row of model."""
    mapper = sa_inspect(model)
    table = mapper.local_table

    key_sets: List[FrozenSet[str]] = [frozenset(col.key for col in mapper.primary_key)]
    key_sets.extend(frozenset([col.key]) for col in table.columns if col.unique)
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint):
            key_sets.append(frozenset(col.key for col in constraint.columns))
    for index in table.indexes:
        if index.unique:
            key_sets.append(frozenset(col.key for col in index.columns))
    return key_sets


def require_unique_selector(model: Type, where: Mapping[str, Any] | None) -> None:
    """Ensure a where dict selects at most one row through a unique key.

    Logical keys (AND / OR / NOT) may only narrow the match further; the
    plain equality keys alone must cover a primary or unique key.

    Raises:
        InvalidFilterError: If where is empty, uses operator dicts on
            columns, or its plain keys do not cover a primary/unique key
    """
    if not where:
        raise InvalidFilterError(f"find_unique on {model.__name__} requires a where clause")

    plain_keys: Set[str] = set()
    for key, value in where.items():
        if key in LOGICAL_KEYS:
            continue
        if isinstance(value, Mapping):
            raise InvalidFilterError("find_unique only accepts plain equality on unique keys")
        _column(model, key)
        plain_keys.add(key)

    if not any(key_set <= plain_keys for key_set in unique_key_sets(model)):
        raise InvalidFilterError(
            f"find_unique on {model.__name__} must select by a unique key, got {sorted(plain_keys)}"
        )
