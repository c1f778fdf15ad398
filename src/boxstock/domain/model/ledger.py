"""Stock ledger — the immutable audit trail of every inventory movement.

Entries record the magnitude of a movement only; its direction follows from
``activity_type``. Replaying an item's entries oldest-first reproduces the
item's balance snapshot exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable

from boxstock.domain.exceptions import ValidationError
from boxstock.domain.model.inventory import ItemKind
from boxstock.domain.model.value_objects import Balance


class ActivityType(Enum):
    ADD = "Add"
    USE = "Use"
    CONVERT = "Convert"
    DISPATCH = "Dispatch"
    WASTAGE = "Wastage"
    REMOVED = "Removed"  # compensating entry written when an item is deleted

    @property
    def is_depleting(self) -> bool:
        return self is not ActivityType.ADD

    @property
    def sign(self) -> int:
        return -1 if self.is_depleting else 1

    def applies_to(self, kind: ItemKind) -> bool:
        if self in (ActivityType.USE, ActivityType.CONVERT):
            return kind is ItemKind.RAW_MATERIAL
        if self is ActivityType.DISPATCH:
            return kind is ItemKind.FINISHED_GOOD
        return True

    @staticmethod
    def parse(raw: str) -> ActivityType:
        for member in ActivityType:
            if member.value.lower() == raw.strip().lower():
                return member
        raise ValidationError(f"Unknown activity type '{raw}'")


@dataclass(frozen=True)
class LedgerEntry:
    """One recorded movement.

    ``id``, ``sequence`` and ``timestamp`` are assigned by the ledger store
    on append; a freshly built entry carries placeholders.
    """

    activity_type: ActivityType
    quantity: int
    weight_kg: Decimal
    actor_id: str
    item_id: str | None = None
    item_kind: ItemKind | None = None
    notes: str | None = None
    id: str | None = None
    sequence: int | None = None
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        if self.quantity < 0 or self.weight_kg < 0:
            raise ValidationError("Ledger amounts are magnitudes and cannot be negative")
        if (self.item_id is None) != (self.item_kind is None):
            raise ValidationError("Ledger entry needs both item id and item kind, or neither")

    @property
    def signed_quantity(self) -> int:
        return self.activity_type.sign * self.quantity

    @property
    def signed_weight_kg(self) -> Decimal:
        return self.activity_type.sign * self.weight_kg


@dataclass(frozen=True)
class LedgerFilter:
    """Criteria for ``LedgerStore.query``.

    ``since`` is inclusive and ``until`` exclusive. Results come newest
    first unless ``oldest_first`` is set.
    """

    item_id: str | None = None
    activity_types: frozenset[ActivityType] = field(default_factory=frozenset)
    actor_id: str | None = None
    since: datetime | None = None
    until: datetime | None = None
    oldest_first: bool = False
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit <= 0:
            raise ValidationError("Query limit must be positive")
        if self.since and self.until and self.until <= self.since:
            raise ValidationError("Query time range is empty")

    def matches(self, entry: LedgerEntry) -> bool:
        if self.item_id is not None and entry.item_id != self.item_id:
            return False
        if self.activity_types and entry.activity_type not in self.activity_types:
            return False
        if self.actor_id is not None and entry.actor_id != self.actor_id:
            return False
        if self.since is not None and entry.timestamp < self.since:
            return False
        if self.until is not None and entry.timestamp >= self.until:
            return False
        return True


def replay_balance(entries: Iterable[LedgerEntry]) -> Balance:
    """Fold entries, oldest first, into the balance they imply.

    Raises ValidationError if the sequence would drive the balance below
    zero at any point, which means the ledger and the rules disagree.
    """
    balance = Balance.empty()
    for entry in entries:
        try:
            balance = balance.shifted(entry.signed_quantity, entry.signed_weight_kg)
        except ValidationError as exc:
            raise ValidationError(
                f"Ledger replay went negative at entry {entry.id}"
            ) from exc
    return balance
