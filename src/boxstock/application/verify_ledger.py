"""Application service: Verify Ledger use case (query).

Replays each item's ledger oldest-first and reports every item whose
stored balance differs from the replayed one. An empty result means the
snapshot and the audit trail agree.
"""

from __future__ import annotations

from boxstock.application.dto import LedgerMismatchDTO
from boxstock.domain.exceptions import ValidationError
from boxstock.domain.model.ledger import LedgerFilter, replay_balance
from boxstock.domain.model.permissions import Action, Module
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.access_policy import AccessPolicyGate


class VerifyLedgerHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        access_gate: AccessPolicyGate,
    ) -> None:
        self._uow_factory = uow_factory
        self._access_gate = access_gate

    def handle(self, actor_id: str) -> list[LedgerMismatchDTO]:
        self._access_gate.authorize(actor_id, Module.STOCK_LOGS, Action.VIEW)

        mismatches: list[LedgerMismatchDTO] = []
        with self._uow_factory() as uow:
            for item in uow.inventory.list_all():
                entries = uow.ledger.query(LedgerFilter(item_id=item.id, oldest_first=True))
                try:
                    balance = replay_balance(entries)
                except ValidationError:
                    replayed = "negative during replay"
                else:
                    if balance == item.balance:
                        continue
                    replayed = str(balance)
                mismatches.append(
                    LedgerMismatchDTO(
                        item_id=item.id,
                        name=item.name,
                        stored=str(item.balance),
                        replayed=replayed,
                    )
                )
        return mismatches
