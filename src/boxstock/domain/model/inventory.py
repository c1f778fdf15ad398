"""Inventory items — raw materials and finished goods.

Both kinds carry a live balance snapshot (``quantity`` and ``weight_kg``).
Raw materials are consumed by weight; finished goods are counted in pieces
and their stored weight is always ``quantity * unit_weight_kg``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from boxstock.domain.exceptions import ValidationError
from boxstock.domain.model.permissions import Module
from boxstock.domain.model.value_objects import Balance, Money, to_quantity, to_weight


class ItemKind(Enum):
    RAW_MATERIAL = "raw_material"
    FINISHED_GOOD = "finished_good"

    @property
    def module(self) -> Module:
        if self is ItemKind.RAW_MATERIAL:
            return Module.RAW_MATERIALS
        return Module.FINISHED_GOODS


class MaterialType(Enum):
    PAPER = "Paper"
    STITCHING_WIRE = "StitchingWire"
    GUM_POWDER = "GumPowder"


class MaterialForm(Enum):
    REEL = "Reel"
    SHEET = "Sheet"


def new_item_id() -> str:
    return str(uuid4())


@dataclass(kw_only=True)
class InventoryItem:
    """Common balance-bearing part of every inventory item.

    Invariants:
    - ``quantity`` and ``weight_kg`` are never negative

    Balances change only through the inventory repository's
    ``adjust_balance``, called by the stock mutation service.
    """

    id: str
    name: str
    quantity: int = 0
    weight_kg: Decimal = Decimal("0.000")
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    date_added: date = field(default_factory=date.today)

    kind = ItemKind.RAW_MATERIAL  # overridden by subclasses

    def __post_init__(self) -> None:
        if not self.id or not str(self.id).strip():
            raise ValidationError("Item id is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Item name is required")
        self.name = self.name.strip()
        self.quantity = to_quantity(self.quantity)
        self.weight_kg = to_weight(self.weight_kg)

    @property
    def balance(self) -> Balance:
        return Balance(self.quantity, self.weight_kg)

    # --- Summary figures ------------------------------------------------------

    @property
    def counterpart_id(self) -> str | None:
        """Supplier or customer this item is tied to."""
        return None

    @property
    def total_weight_kg(self) -> Decimal:
        return self.weight_kg

    @property
    def total_amount(self) -> Money:
        return Money.zero()


@dataclass(kw_only=True)
class RawMaterial(InventoryItem):
    """Paper reels/sheets, stitching wire or gum powder bought from a supplier."""

    material_type: MaterialType = MaterialType.PAPER
    supplier_id: str | None = None
    invoice_number: str | None = None
    material_form: MaterialForm | None = None
    size_width_cm: Decimal | None = None
    gsm: int | None = None
    bf: int | None = None
    rate_per_kg: Money | None = None

    kind = ItemKind.RAW_MATERIAL

    @property
    def counterpart_id(self) -> str | None:
        return self.supplier_id

    @property
    def total_amount(self) -> Money:
        if self.rate_per_kg is None:
            return Money.zero()
        return self.rate_per_kg.times(self.weight_kg)


@dataclass(kw_only=True)
class FinishedGood(InventoryItem):
    """Boxes produced for a customer, counted in pieces."""

    customer_id: str | None = None
    length_cm: Decimal = Decimal("0")
    width_cm: Decimal = Decimal("0")
    height_cm: Decimal = Decimal("0")
    number_of_ply: int = 3
    unit_weight_kg: Decimal = Decimal("0")
    rate_per_piece: Money | None = None

    kind = ItemKind.FINISHED_GOOD

    def __post_init__(self) -> None:
        super().__post_init__()
        self.unit_weight_kg = to_weight(self.unit_weight_kg)
        if self.unit_weight_kg <= 0:
            raise ValidationError("Weight of one box must be greater than zero")
        if self.number_of_ply <= 0:
            raise ValidationError("Number of ply must be positive")
        for dim in (self.length_cm, self.width_cm, self.height_cm):
            if Decimal(dim) < 0:
                raise ValidationError("Box dimensions cannot be negative")

    def weight_of(self, pieces: int) -> Decimal:
        """Weight of ``pieces`` boxes, rounded to grams."""
        return to_weight(self.unit_weight_kg * pieces)

    @property
    def dimensions(self) -> str:
        return f"{self.length_cm}×{self.height_cm}×{self.width_cm}cm"

    @property
    def counterpart_id(self) -> str | None:
        return self.customer_id

    @property
    def total_weight_kg(self) -> Decimal:
        return self.weight_of(self.quantity)

    @property
    def total_amount(self) -> Money:
        if self.rate_per_piece is None:
            return Money.zero()
        return self.rate_per_piece.times(self.quantity)
