"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from boxstock.domain.exceptions import ValidationError

# Weights are tracked to the gram.
WEIGHT_PLACES = Decimal("0.001")
MONEY_PLACES = Decimal("0.01")


def to_weight(value: str | float | int | Decimal) -> Decimal:
    """Coerce a kilogram amount to a non-negative Decimal rounded to grams."""
    try:
        weight = Decimal(str(value)).quantize(WEIGHT_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid weight: {value!r}") from exc
    if not weight.is_finite():
        raise ValidationError(f"Invalid weight: {value!r}")
    if weight < 0:
        raise ValidationError(f"Weight cannot be negative, got {weight}")
    return weight


def to_quantity(value: int) -> int:
    """Validate a piece/reel count."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Quantity must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise ValidationError(f"Quantity cannot be negative, got {value}")
    return value


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "INR"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def times(self, factor: int | Decimal) -> Money:
        """Scale by a piece count or a weight, rounded to paise."""
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        amount = (self.amount * factor).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
        return Money(amount, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"₹{self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))


@dataclass(frozen=True)
class Balance:
    """On-hand amounts of one inventory item."""

    quantity: int
    weight_kg: Decimal

    def __post_init__(self) -> None:
        if self.quantity < 0 or self.weight_kg < 0:
            raise ValidationError(
                f"Balance cannot be negative ({self.quantity} pcs, {self.weight_kg} kg)"
            )

    def shifted(self, delta_quantity: int, delta_weight_kg: Decimal) -> Balance:
        """Return the balance after applying signed deltas."""
        return Balance(self.quantity + delta_quantity, self.weight_kg + delta_weight_kg)

    def covers(self, quantity: int, weight_kg: Decimal) -> bool:
        return quantity <= self.quantity and weight_kg <= self.weight_kg

    def __str__(self) -> str:
        return f"{self.quantity} pcs / {self.weight_kg} kg"

    @staticmethod
    def empty() -> Balance:
        return Balance(0, Decimal("0.000"))
