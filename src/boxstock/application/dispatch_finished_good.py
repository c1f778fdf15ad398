"""Application service: Dispatch Finished Good use case."""

from __future__ import annotations

from boxstock.application.dto import MutationDTO
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.service.stock_mutation_service import StockMutationService


class DispatchFinishedGoodHandler:

    def __init__(self, mutation_service: StockMutationService) -> None:
        self._mutation_service = mutation_service

    def handle(
        self,
        actor_id: str,
        item_id: str,
        quantity: int,
        notes: str | None = None,
    ) -> MutationDTO:
        """Ship ``quantity`` boxes; the weight leaving stock is derived
        from the box's unit weight."""
        result = self._mutation_service.apply_mutation(
            item_id=item_id,
            activity_type=ActivityType.DISPATCH,
            quantity=quantity,
            weight_kg=0,
            actor_id=actor_id,
            notes=notes,
        )
        return MutationDTO.from_result(item_id, ActivityType.DISPATCH, result)
