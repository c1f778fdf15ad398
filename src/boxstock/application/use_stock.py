"""Application service: Use Raw Material use case.

Consumption on the shop floor: weight is what matters, a reel count is
optional.
"""

from __future__ import annotations

from decimal import Decimal

from boxstock.application.dto import MutationDTO
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.service.stock_mutation_service import StockMutationService


class UseStockHandler:

    def __init__(self, mutation_service: StockMutationService) -> None:
        self._mutation_service = mutation_service

    def handle(
        self,
        actor_id: str,
        item_id: str,
        weight_kg: Decimal | str,
        quantity: int = 0,
        purpose: str | None = None,
    ) -> MutationDTO:
        result = self._mutation_service.apply_mutation(
            item_id=item_id,
            activity_type=ActivityType.USE,
            quantity=quantity,
            weight_kg=weight_kg,
            actor_id=actor_id,
            notes=purpose,
        )
        return MutationDTO.from_result(item_id, ActivityType.USE, result)
