"""Domain service: Wastage Sale recording.

A scrap sale is not tied to an inventory item, but it still leaves a
``Wastage`` entry in the stock ledger. Both rows are written in one unit
of work.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

from boxstock.domain.model.ledger import ActivityType, LedgerEntry
from boxstock.domain.model.permissions import Action, Module
from boxstock.domain.model.value_objects import Money
from boxstock.domain.model.wastage import WastageSale
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.access_policy import AccessPolicyGate
from boxstock.logging_config import get_logger

logger = get_logger("wastage")


class WastageSaleService:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        access_gate: AccessPolicyGate,
    ) -> None:
        self._uow_factory = uow_factory
        self._access_gate = access_gate

    def record_sale(
        self,
        actor_id: str,
        item_description: str,
        quantity: int,
        weight_kg: Decimal | str,
        sale_amount: Money,
        sale_date: date | None = None,
        notes: str | None = None,
    ) -> tuple[WastageSale, str]:
        """Record a scrap sale; returns the sale and its ledger entry id."""
        self._access_gate.authorize(actor_id, Module.WASTAGE_SALES, Action.ADD)

        sale = WastageSale(
            id=str(uuid4()),
            sale_date=sale_date or date.today(),
            item_description=item_description,
            quantity=quantity,
            weight_kg=weight_kg,
            sale_amount=sale_amount,
            actor_id=actor_id,
            notes=notes or None,
        )
        entry = LedgerEntry(
            activity_type=ActivityType.WASTAGE,
            quantity=sale.quantity,
            weight_kg=sale.weight_kg,
            actor_id=actor_id,
            notes=f"Wastage sale: {sale.item_description}",
        )

        with self._uow_factory() as uow:
            uow.wastage.add(sale)
            entry_id = uow.ledger.append(entry)

        logger.info(
            "wastage_sale_recorded",
            extra={
                "sale_id": sale.id,
                "entry_id": entry_id,
                "actor_id": actor_id,
                "weight_kg": sale.weight_kg,
                "sale_amount": sale.sale_amount.amount,
            },
        )
        return sale, entry_id
