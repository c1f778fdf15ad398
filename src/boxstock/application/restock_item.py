"""Application service: Restock an existing item (``Add`` on a known id)."""

from __future__ import annotations

from decimal import Decimal

from boxstock.application.dto import MutationDTO
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.service.stock_mutation_service import StockMutationService


class RestockItemHandler:

    def __init__(self, mutation_service: StockMutationService) -> None:
        self._mutation_service = mutation_service

    def handle(
        self,
        actor_id: str,
        item_id: str,
        quantity: int = 0,
        weight_kg: Decimal | str = Decimal("0"),
        notes: str | None = None,
    ) -> MutationDTO:
        result = self._mutation_service.apply_mutation(
            item_id=item_id,
            activity_type=ActivityType.ADD,
            quantity=quantity,
            weight_kg=weight_kg,
            actor_id=actor_id,
            notes=notes,
        )
        return MutationDTO.from_result(item_id, ActivityType.ADD, result)
