"""Application service: Show Wastage Sales use case (query)."""

from __future__ import annotations

from boxstock.application.dto import WastageSaleDTO
from boxstock.application.record_wastage_sale import to_dto
from boxstock.domain.model.permissions import Action, Module
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.access_policy import AccessPolicyGate


class ShowWastageSalesHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        access_gate: AccessPolicyGate,
    ) -> None:
        self._uow_factory = uow_factory
        self._access_gate = access_gate

    def handle(self, actor_id: str) -> list[WastageSaleDTO]:
        self._access_gate.authorize(actor_id, Module.WASTAGE_SALES, Action.VIEW)
        with self._uow_factory() as uow:
            sales = uow.wastage.list_all()
        return [to_dto(sale) for sale in sales]
