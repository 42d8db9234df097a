"""
Store errors raised by the query engine.
"""
from __future__ import annotations


class EmptyStoreError(ZeroDivisionError):
    """An average was requested over a store holding no records."""

    def __init__(self, metric: str) -> None:
        super().__init__(f"Cannot compute {metric}: store has no customers")
        self.metric = metric


class UnknownFieldError(ValueError):
    """A sort was requested on a field that is not a customer field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown customer field: {field!r}")
        self.field = field
