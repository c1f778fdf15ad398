"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InsufficientStockError(ValidationError):
    """A depleting mutation asked for more than the item has on hand."""

    def __init__(self, item_id: str, requested, available) -> None:
        self.item_id = item_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for item '{item_id}' "
            f"(requested {requested}, available {available})"
        )


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class UnauthorizedError(DomainException):
    """The actor lacks the permission required for the operation."""


class StoreError(DomainException):
    """The underlying persistence layer failed; nothing was written."""
