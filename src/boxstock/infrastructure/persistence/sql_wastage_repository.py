"""SQL implementation of WastageSaleRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from boxstock.domain.model.wastage import WastageSale
from boxstock.domain.repository.wastage_repository import WastageSaleRepository
from boxstock.infrastructure.persistence.sql_engine import translate_store_errors
from boxstock.infrastructure.persistence.sql_schema import wastage_sales

_t = wastage_sales


class SqlWastageSaleRepository(WastageSaleRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, sale: WastageSale) -> None:
        values = {
            "id": sale.id,
            "sale_date": sale.sale_date,
            "item_description": sale.item_description,
            "quantity": sale.quantity,
            "weight_g": sale.weight_kg,
            "sale_amount": sale.sale_amount,
            "notes": sale.notes,
            "actor_id": sale.actor_id,
            "created_at": sale.created_at,
        }
        with translate_store_errors("record a wastage sale"):
            self._session.execute(insert(_t).values(**values))

    def list_all(self) -> list[WastageSale]:
        stmt = select(_t).order_by(_t.c.sale_date.desc(), _t.c.created_at.desc())
        with translate_store_errors("list wastage sales"):
            rows = self._session.execute(stmt).all()
        return [
            WastageSale(
                id=row.id,
                sale_date=row.sale_date,
                item_description=row.item_description,
                quantity=row.quantity,
                weight_kg=row.weight_g,
                sale_amount=row.sale_amount,
                actor_id=row.actor_id,
                notes=row.notes,
                created_at=row.created_at,
            )
            for row in rows
        ]
