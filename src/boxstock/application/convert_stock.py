"""Application service: Convert Raw Material use case.

Converting a reel into sheets (or any other form) takes the weight out
of the source item; the note names what it became.
"""

from __future__ import annotations

from decimal import Decimal

from boxstock.application.dto import MutationDTO
from boxstock.domain.exceptions import ValidationError
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.service.stock_mutation_service import StockMutationService


class ConvertStockHandler:

    def __init__(self, mutation_service: StockMutationService) -> None:
        self._mutation_service = mutation_service

    def handle(
        self,
        actor_id: str,
        item_id: str,
        weight_kg: Decimal | str,
        conversion_type: str,
        quantity: int = 0,
    ) -> MutationDTO:
        if not conversion_type or not conversion_type.strip():
            raise ValidationError("Conversion target is required")
        result = self._mutation_service.apply_mutation(
            item_id=item_id,
            activity_type=ActivityType.CONVERT,
            quantity=quantity,
            weight_kg=weight_kg,
            actor_id=actor_id,
            notes=f"Converted to {conversion_type.strip()}",
        )
        return MutationDTO.from_result(item_id, ActivityType.CONVERT, result)
