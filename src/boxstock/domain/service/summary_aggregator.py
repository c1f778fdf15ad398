"""Domain service: Summary Aggregator.

Read-only rollups over inventory items, ledger entries and wastage sales.
Nothing here touches a repository; callers pass in what they have read.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Generic, Hashable, Iterable, NamedTuple, TypeVar

from boxstock.domain.model.inventory import InventoryItem
from boxstock.domain.model.ledger import ActivityType, LedgerEntry
from boxstock.domain.model.value_objects import MONEY_PLACES, Money
from boxstock.domain.model.wastage import WastageSale

K = TypeVar("K", bound=Hashable)


class SummaryKey(NamedTuple):
    """Composite grouping key: what the item is and who it is for/from."""

    item_name: str
    counterpart_id: str | None


@dataclass(frozen=True)
class SummaryGroup(Generic[K]):
    key: K
    total_quantity: int
    total_weight_kg: Decimal
    total_amount: Money
    item_count: int


def by_name_and_counterpart(item: InventoryItem) -> SummaryKey:
    return SummaryKey(item.name, item.counterpart_id)


# Finished goods: box name + customer. Raw materials: material + supplier.
by_product_and_customer = by_name_and_counterpart
by_material_and_supplier = by_name_and_counterpart


def summarize_by_key(
    items: Iterable[InventoryItem],
    key_fn: Callable[[InventoryItem], K],
) -> list[SummaryGroup[K]]:
    """Group items by ``key_fn`` and total quantity, weight and amount.

    Groups come back in the order their key was first seen. Items without
    a rate still count towards quantity and weight; they add zero amount.
    """
    totals: dict[K, list] = {}
    for item in items:
        key = key_fn(item)
        acc = totals.get(key)
        if acc is None:
            totals[key] = [item.quantity, item.total_weight_kg, item.total_amount, 1]
        else:
            acc[0] += item.quantity
            acc[1] += item.total_weight_kg
            acc[2] = acc[2] + item.total_amount
            acc[3] += 1

    return [
        SummaryGroup(
            key=key,
            total_quantity=qty,
            total_weight_kg=weight,
            total_amount=amount,
            item_count=count,
        )
        for key, (qty, weight, amount, count) in totals.items()
    ]


# --- Dashboard figures --------------------------------------------------------


@dataclass(frozen=True)
class InventoryTotals:
    item_count: int
    total_quantity: int
    total_weight_kg: Decimal
    total_amount: Money


@dataclass(frozen=True)
class WastageTotals:
    sale_count: int
    total_quantity: int
    total_weight_kg: Decimal
    total_amount: Money

    @property
    def average_rate_per_kg(self) -> Money:
        if self.total_weight_kg <= 0:
            return Money.zero()
        return Money((self.total_amount.amount / self.total_weight_kg).quantize(MONEY_PLACES))


def inventory_totals(items: Iterable[InventoryItem]) -> InventoryTotals:
    groups = summarize_by_key(items, lambda _item: None)
    if not groups:
        return InventoryTotals(0, 0, Decimal("0.000"), Money.zero())
    only = groups[0]
    return InventoryTotals(
        item_count=only.item_count,
        total_quantity=only.total_quantity,
        total_weight_kg=only.total_weight_kg,
        total_amount=only.total_amount,
    )


def wastage_totals(sales: Iterable[WastageSale]) -> WastageTotals:
    count = 0
    quantity = 0
    weight = Decimal("0.000")
    amount = Money.zero()
    for sale in sales:
        count += 1
        quantity += sale.quantity
        weight += sale.weight_kg
        amount = amount + sale.sale_amount
    return WastageTotals(count, quantity, weight, amount)


def activity_counts(entries: Iterable[LedgerEntry]) -> dict[ActivityType, int]:
    """Number of entries per activity type; every type is present."""
    counts = Counter(entry.activity_type for entry in entries)
    return {activity: counts.get(activity, 0) for activity in ActivityType}
