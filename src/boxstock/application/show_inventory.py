"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from boxstock.application.dto import InventoryLineDTO, InventoryReportDTO, SummaryRowDTO
from boxstock.domain.model.inventory import InventoryItem, ItemKind
from boxstock.domain.model.permissions import Action
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.access_policy import AccessPolicyGate
from boxstock.domain.service.summary_aggregator import (
    SummaryGroup,
    SummaryKey,
    by_name_and_counterpart,
    summarize_by_key,
)


class ShowInventoryHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        access_gate: AccessPolicyGate,
    ) -> None:
        self._uow_factory = uow_factory
        self._access_gate = access_gate

    def handle(self, actor_id: str, kind: ItemKind) -> InventoryReportDTO:
        """List every item of ``kind`` plus its name/counterpart rollup."""
        self._access_gate.authorize(actor_id, kind.module, Action.VIEW)
        with self._uow_factory() as uow:
            items = uow.inventory.list_all(kind)

        return InventoryReportDTO(
            lines=[self._line(item) for item in items],
            groups=[self._row(g) for g in summarize_by_key(items, by_name_and_counterpart)],
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _line(item: InventoryItem) -> InventoryLineDTO:
        return InventoryLineDTO(
            item_id=item.id,
            kind=item.kind.value,
            name=item.name,
            counterpart_id=item.counterpart_id or "-",
            quantity=item.quantity,
            weight_kg=f"{item.total_weight_kg:.3f}",
            amount=str(item.total_amount),
            date_added=item.date_added.isoformat(),
        )

    @staticmethod
    def _row(group: SummaryGroup[SummaryKey]) -> SummaryRowDTO:
        return SummaryRowDTO(
            name=group.key.item_name,
            counterpart_id=group.key.counterpart_id or "-",
            item_count=group.item_count,
            total_quantity=group.total_quantity,
            total_weight_kg=f"{group.total_weight_kg:.3f}",
            total_amount=str(group.total_amount),
        )
