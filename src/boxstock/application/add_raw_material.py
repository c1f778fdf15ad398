"""Application service: Add Raw Material use case.

Registers a new paper reel/sheet, wire or gum lot and records its
opening stock as an ``Add`` entry.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from boxstock.application.dto import MutationDTO
from boxstock.domain.model.inventory import (
    MaterialForm,
    MaterialType,
    RawMaterial,
    new_item_id,
)
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.model.value_objects import Money
from boxstock.domain.service.stock_mutation_service import StockMutationService


class AddRawMaterialHandler:

    def __init__(self, mutation_service: StockMutationService) -> None:
        self._mutation_service = mutation_service

    def handle(
        self,
        actor_id: str,
        name: str,
        material_type: MaterialType,
        weight_kg: Decimal | str,
        quantity: int = 0,
        supplier_id: str | None = None,
        invoice_number: str | None = None,
        material_form: MaterialForm | None = None,
        size_width_cm: Decimal | None = None,
        gsm: int | None = None,
        bf: int | None = None,
        rate_per_kg: Money | None = None,
        date_added: date | None = None,
        notes: str | None = None,
    ) -> MutationDTO:
        item = RawMaterial(
            id=new_item_id(),
            name=name,
            material_type=material_type,
            supplier_id=supplier_id or None,
            invoice_number=invoice_number or None,
            material_form=material_form,
            size_width_cm=size_width_cm,
            gsm=gsm,
            bf=bf,
            rate_per_kg=rate_per_kg,
            date_added=date_added or date.today(),
        )
        result = self._mutation_service.apply_mutation(
            item_id=item.id,
            activity_type=ActivityType.ADD,
            quantity=quantity,
            weight_kg=weight_kg,
            actor_id=actor_id,
            notes=notes or f"Added {item.name}",
            new_item=item,
        )
        return MutationDTO.from_result(item.id, ActivityType.ADD, result)
