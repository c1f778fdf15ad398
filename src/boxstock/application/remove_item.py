"""Application service: Remove Item use case."""

from __future__ import annotations

from boxstock.application.dto import MutationDTO
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.service.stock_mutation_service import StockMutationService


class RemoveItemHandler:

    def __init__(self, mutation_service: StockMutationService) -> None:
        self._mutation_service = mutation_service

    def handle(self, actor_id: str, item_id: str, notes: str | None = None) -> MutationDTO:
        result = self._mutation_service.remove_item(item_id, actor_id, notes=notes)
        return MutationDTO.from_result(item_id, ActivityType.REMOVED, result)
