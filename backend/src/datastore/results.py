"""Tagged result of a read-one-by-unique-key operation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ReadStatus(str, Enum):
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    # Row exists but belongs to another tenant. Callers see NOT_FOUND.
    FORBIDDEN = "FORBIDDEN"


@dataclass(frozen=True)
class ReadOutcome:
    status: ReadStatus
    record: Optional[Any] = None

    @classmethod
    def found(cls, record: Any) -> "ReadOutcome":
        return cls(ReadStatus.FOUND, record)

    @classmethod
    def not_found(cls) -> "ReadOutcome":
        return cls(ReadStatus.NOT_FOUND)

    @classmethod
    def forbidden(cls) -> "ReadOutcome":
        # The foreign record is deliberately not kept
        return cls(ReadStatus.FORBIDDEN)

    @classmethod
    def of(cls, result: Any) -> "ReadOutcome":
        """Wrap a raw storage result (record or None)."""
        if isinstance(result, ReadOutcome):
            return result
        return cls.not_found() if result is None else cls.found(result)

    @property
    def is_found(self) -> bool:
        return self.status is ReadStatus.FOUND

    def visible_record(self) -> Optional[Any]:
        """Record as seen by callers: FORBIDDEN collapses to None."""
        return self.record if self.is_found else None
