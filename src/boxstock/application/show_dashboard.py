"""Application service: Dashboard use case (query).

Headline figures across both item kinds, scrap sales and recent ledger
activity.
"""

from __future__ import annotations

from boxstock.application.dto import DashboardDTO, LedgerEntryDTO, TotalsDTO
from boxstock.domain.model.inventory import ItemKind
from boxstock.domain.model.ledger import LedgerFilter
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.summary_aggregator import (
    activity_counts,
    inventory_totals,
    wastage_totals,
)

RECENT_ACTIVITY = 5


class ShowDashboardHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> DashboardDTO:
        with self._uow_factory() as uow:
            raw = inventory_totals(uow.inventory.list_all(ItemKind.RAW_MATERIAL))
            boxes = inventory_totals(uow.inventory.list_all(ItemKind.FINISHED_GOOD))
            scrap = wastage_totals(uow.wastage.list_all())
            counts = activity_counts(uow.ledger.query())
            recent = uow.ledger.query(LedgerFilter(limit=RECENT_ACTIVITY)).all()

        return DashboardDTO(
            raw_materials=TotalsDTO(
                raw.item_count,
                raw.total_quantity,
                f"{raw.total_weight_kg:.3f}",
                str(raw.total_amount),
            ),
            finished_goods=TotalsDTO(
                boxes.item_count,
                boxes.total_quantity,
                f"{boxes.total_weight_kg:.3f}",
                str(boxes.total_amount),
            ),
            wastage=TotalsDTO(
                scrap.sale_count,
                scrap.total_quantity,
                f"{scrap.total_weight_kg:.3f}",
                str(scrap.total_amount),
            ),
            wastage_average_rate=str(scrap.average_rate_per_kg),
            activity_counts={activity.value: n for activity, n in counts.items()},
            recent_activity=[LedgerEntryDTO.from_entry(e) for e in recent],
        )
