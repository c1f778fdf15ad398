"""Application service: Show Stock Logs use case (query)."""

from __future__ import annotations

import dataclasses
from datetime import datetime

from boxstock.application.dto import LedgerEntryDTO, StockLogReportDTO
from boxstock.domain.model.ledger import ActivityType, LedgerFilter
from boxstock.domain.model.permissions import Action, Module
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.access_policy import AccessPolicyGate
from boxstock.domain.service.summary_aggregator import activity_counts


class ShowStockLogsHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        access_gate: AccessPolicyGate,
    ) -> None:
        self._uow_factory = uow_factory
        self._access_gate = access_gate

    def handle(
        self,
        actor_id: str,
        item_id: str | None = None,
        activity_types: frozenset[ActivityType] = frozenset(),
        performed_by: str | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = 50,
    ) -> StockLogReportDTO:
        """Newest-first listing of matching entries.

        ``counts`` covers every entry matching the filter, not only the
        ``limit`` most recent ones that are listed.
        """
        self._access_gate.authorize(actor_id, Module.STOCK_LOGS, Action.VIEW)

        criteria = LedgerFilter(
            item_id=item_id,
            activity_types=frozenset(activity_types),
            actor_id=performed_by,
            since=since,
            until=until,
        )
        with self._uow_factory() as uow:
            counts = activity_counts(uow.ledger.query(criteria))
            listed = uow.ledger.query(dataclasses.replace(criteria, limit=limit)).all()

        return StockLogReportDTO(
            entries=[LedgerEntryDTO.from_entry(e) for e in listed],
            counts={activity.value: n for activity, n in counts.items()},
        )
