"""Wastage sale — scrap sold by weight, tracked outside any inventory item."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from boxstock.domain.exceptions import ValidationError
from boxstock.domain.model.value_objects import MONEY_PLACES, Money, to_quantity, to_weight


@dataclass(frozen=True)
class WastageSale:
    id: str
    sale_date: date
    item_description: str
    quantity: int
    weight_kg: Decimal
    sale_amount: Money
    actor_id: str
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.item_description or not self.item_description.strip():
            raise ValidationError("Item description is required")
        object.__setattr__(self, "item_description", self.item_description.strip())
        object.__setattr__(self, "quantity", to_quantity(self.quantity))
        object.__setattr__(self, "weight_kg", to_weight(self.weight_kg))

    @property
    def rate_per_kg(self) -> Money:
        if self.weight_kg <= 0:
            return Money.zero()
        rate = (self.sale_amount.amount / self.weight_kg).quantize(
            MONEY_PLACES, rounding=ROUND_HALF_UP
        )
        return Money(rate, self.sale_amount.currency)
