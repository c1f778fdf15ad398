"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from boxstock.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
)
from boxstock.infrastructure.bootstrap import actor_provider
from boxstock.infrastructure.config import Settings

# Most specific first: InsufficientStockError is also a ValidationError.
_PREFIXES: list[tuple[type[DomainException], str]] = [
    (InsufficientStockError, "Insufficient stock"),
    (UnauthorizedError, "Permission denied"),
    (StoreError, "Storage failure (safe to retry)"),
    (NotFoundError, "Not found"),
]


def click_error(exc: DomainException) -> click.ClickException:
    """Turn a domain error into a user-facing CLI error."""
    for error_type, prefix in _PREFIXES:
        if isinstance(exc, error_type):
            return click.ClickException(f"{prefix}: {exc}")
    return click.ClickException(f"Invalid input: {exc}")


def current_actor_id(settings: Settings) -> str:
    return actor_provider(settings).get_current_actor().id


def to_utc(value: datetime | None) -> datetime | None:
    """click.DateTime yields naive datetimes; the ledger stores UTC."""
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)
