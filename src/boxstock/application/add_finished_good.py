"""Application service: Add Finished Good use case."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from boxstock.application.dto import MutationDTO
from boxstock.domain.model.inventory import FinishedGood, new_item_id
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.model.value_objects import Money
from boxstock.domain.service.stock_mutation_service import StockMutationService


class AddFinishedGoodHandler:

    def __init__(self, mutation_service: StockMutationService) -> None:
        self._mutation_service = mutation_service

    def handle(
        self,
        actor_id: str,
        box_name: str,
        quantity: int,
        unit_weight_kg: Decimal | str,
        customer_id: str | None = None,
        length_cm: Decimal = Decimal("0"),
        width_cm: Decimal = Decimal("0"),
        height_cm: Decimal = Decimal("0"),
        number_of_ply: int = 3,
        rate_per_piece: Money | None = None,
        date_added: date | None = None,
    ) -> MutationDTO:
        """Register a box lot. Its weight is always pieces * unit weight."""
        item = FinishedGood(
            id=new_item_id(),
            name=box_name,
            customer_id=customer_id or None,
            length_cm=length_cm,
            width_cm=width_cm,
            height_cm=height_cm,
            number_of_ply=number_of_ply,
            unit_weight_kg=unit_weight_kg,
            rate_per_piece=rate_per_piece,
            date_added=date_added or date.today(),
        )
        result = self._mutation_service.apply_mutation(
            item_id=item.id,
            activity_type=ActivityType.ADD,
            quantity=quantity,
            weight_kg=0,
            actor_id=actor_id,
            notes=f"Added {item.name} ({item.dimensions}, {item.number_of_ply} ply)",
            new_item=item,
        )
        return MutationDTO.from_result(item.id, ActivityType.ADD, result)
