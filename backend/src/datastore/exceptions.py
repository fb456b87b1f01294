"""Data store errors"""


class DataStoreError(Exception):
    """Base class for data client errors."""
    pass


class UnknownModelError(DataStoreError):
    """Raised when an operation names a model that is not mapped."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(f"Unknown model: {model_name}")


class InvalidFilterError(DataStoreError):
    """Raised for unknown columns/operators or non-unique find_unique keys."""
    pass
