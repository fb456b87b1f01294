"""Data store access layer.

Feature code talks to storage through DataClient; every operation is an
Operation value that middlewares (tenant isolation) may rewrite before the
SQLAlchemy executor runs it.
"""

from .client import DataClient
from .exceptions import DataStoreError, InvalidFilterError, UnknownModelError
from .operations import Action, Operation
from .results import ReadOutcome, ReadStatus

__all__ = [
    "DataClient",
    "DataStoreError",
    "InvalidFilterError",
    "UnknownModelError",
    "Action",
    "Operation",
    "ReadOutcome",
    "ReadStatus",
]
