"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from boxstock.domain.model.ledger import ActivityType, LedgerEntry
from boxstock.domain.service.stock_mutation_service import MutationResult


@dataclass(frozen=True)
class MutationDTO:
    """Output: the outcome of one stock movement."""

    item_id: str
    activity_type: str
    quantity: int  # balance after the movement
    weight_kg: str  # formatted, e.g. "70.000"
    ledger_entry_id: str

    @staticmethod
    def from_result(
        item_id: str, activity_type: ActivityType, result: MutationResult
    ) -> MutationDTO:
        return MutationDTO(
            item_id=item_id,
            activity_type=activity_type.value,
            quantity=result.new_balance.quantity,
            weight_kg=f"{result.new_balance.weight_kg:.3f}",
            ledger_entry_id=result.ledger_entry_id,
        )


@dataclass(frozen=True)
class InventoryLineDTO:
    """Output: one item in a detail listing."""

    item_id: str
    kind: str
    name: str
    counterpart_id: str
    quantity: int
    weight_kg: str
    amount: str
    date_added: str


@dataclass(frozen=True)
class SummaryRowDTO:
    """Output: one summary group (item name + supplier/customer)."""

    name: str
    counterpart_id: str
    item_count: int
    total_quantity: int
    total_weight_kg: str
    total_amount: str


@dataclass(frozen=True)
class LedgerEntryDTO:
    id: str
    timestamp: str
    activity_type: str
    item_id: str
    quantity: int
    weight_kg: str
    actor_id: str
    notes: str

    @staticmethod
    def from_entry(entry: LedgerEntry) -> LedgerEntryDTO:
        return LedgerEntryDTO(
            id=entry.id or "",
            timestamp=entry.timestamp.strftime("%Y-%m-%d %H:%M:%S UTC") if entry.timestamp else "",
            activity_type=entry.activity_type.value,
            item_id=entry.item_id or "-",
            quantity=entry.quantity,
            weight_kg=f"{entry.weight_kg:.3f}",
            actor_id=entry.actor_id,
            notes=entry.notes or "",
        )


@dataclass(frozen=True)
class WastageSaleDTO:
    id: str
    sale_date: str
    item_description: str
    quantity: int
    weight_kg: str
    sale_amount: str
    rate_per_kg: str


@dataclass(frozen=True)
class InventoryReportDTO:
    lines: list[InventoryLineDTO]
    groups: list[SummaryRowDTO]


@dataclass(frozen=True)
class StockLogReportDTO:
    entries: list[LedgerEntryDTO]
    counts: dict[str, int]  # activity type -> entries matching the filter


@dataclass(frozen=True)
class TotalsDTO:
    item_count: int
    total_quantity: int
    total_weight_kg: str
    total_amount: str


@dataclass(frozen=True)
class DashboardDTO:
    raw_materials: TotalsDTO
    finished_goods: TotalsDTO
    wastage: TotalsDTO
    wastage_average_rate: str
    activity_counts: dict[str, int]
    recent_activity: list[LedgerEntryDTO]


@dataclass(frozen=True)
class LedgerMismatchDTO:
    """Output: an item whose stored balance disagrees with its ledger."""

    item_id: str
    name: str
    stored: str
    replayed: str


@dataclass(frozen=True)
class ActorDTO:
    id: str
    full_name: str
    role: str
    permissions: list[str]
