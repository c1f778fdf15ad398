"""Column types that keep weights and money exact on every backend.

Weights are stored as integer grams and money as integer minor units
(paise), so SQLite never round-trips them through floats and the
conditional balance update compares integers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.types import TypeDecorator

from boxstock.domain.model.value_objects import MONEY_PLACES, WEIGHT_PLACES, Money

GRAMS_PER_KG = 1000
PAISE_PER_RUPEE = 100


def kg_to_grams(weight_kg: Decimal) -> int:
    return int(weight_kg * GRAMS_PER_KG)


def grams_to_kg(grams: int) -> Decimal:
    return (Decimal(grams) / GRAMS_PER_KG).quantize(WEIGHT_PLACES)


class Grams(TypeDecorator):
    """Decimal kilograms in Python, integer grams in the database."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return kg_to_grams(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return grams_to_kg(value)


class Paise(TypeDecorator):
    """``Money`` in Python, integer paise in the database."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        amount = value.amount if isinstance(value, Money) else Decimal(value)
        return int(amount * PAISE_PER_RUPEE)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Money((Decimal(value) / PAISE_PER_RUPEE).quantize(MONEY_PLACES))


class DecimalText(TypeDecorator):
    """Descriptive decimals (dimensions, sizes) stored verbatim as text."""

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class UTCDateTime(TypeDecorator):
    """Aware UTC datetimes in Python regardless of backend tz support."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime given to a UTC column")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
