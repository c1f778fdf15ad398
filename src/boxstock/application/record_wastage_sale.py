"""Application service: Record Wastage Sale use case."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from boxstock.application.dto import WastageSaleDTO
from boxstock.domain.model.value_objects import Money
from boxstock.domain.model.wastage import WastageSale
from boxstock.domain.service.wastage_sale_service import WastageSaleService


class RecordWastageSaleHandler:

    def __init__(self, wastage_service: WastageSaleService) -> None:
        self._wastage_service = wastage_service

    def handle(
        self,
        actor_id: str,
        item_description: str,
        weight_kg: Decimal | str,
        sale_amount: Decimal | str,
        quantity: int = 0,
        sale_date: date | None = None,
        notes: str | None = None,
    ) -> WastageSaleDTO:
        sale, _entry_id = self._wastage_service.record_sale(
            actor_id=actor_id,
            item_description=item_description,
            quantity=quantity,
            weight_kg=weight_kg,
            sale_amount=Money.of(sale_amount),
            sale_date=sale_date,
            notes=notes,
        )
        return to_dto(sale)


def to_dto(sale: WastageSale) -> WastageSaleDTO:
    return WastageSaleDTO(
        id=sale.id,
        sale_date=sale.sale_date.isoformat(),
        item_description=sale.item_description,
        quantity=sale.quantity,
        weight_kg=f"{sale.weight_kg:.3f}",
        sale_amount=str(sale.sale_amount),
        rate_per_kg=str(sale.rate_per_kg),
    )
