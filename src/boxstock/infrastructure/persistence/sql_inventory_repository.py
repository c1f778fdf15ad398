"""SQL implementation of InventoryRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger, Integer, delete, insert, literal, select, type_coerce, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from boxstock.domain.exceptions import InsufficientStockError, NotFoundError, ValidationError
from boxstock.domain.model.inventory import (
    FinishedGood,
    InventoryItem,
    ItemKind,
    MaterialForm,
    MaterialType,
    RawMaterial,
)
from boxstock.domain.model.value_objects import Balance
from boxstock.domain.repository.inventory_repository import InventoryRepository
from boxstock.infrastructure.persistence.sql_engine import translate_store_errors
from boxstock.infrastructure.persistence.sql_schema import inventory_items
from boxstock.infrastructure.persistence.sql_types import kg_to_grams

_t = inventory_items


class SqlInventoryRepository(InventoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- InventoryRepository interface ----------------------------------------

    def get(self, item_id: str) -> InventoryItem | None:
        with translate_store_errors("read an inventory item"):
            row = self._session.execute(select(_t).where(_t.c.id == item_id)).first()
        return self._to_domain(row) if row is not None else None

    def list_all(self, kind: ItemKind | None = None) -> list[InventoryItem]:
        stmt = select(_t).order_by(_t.c.created_at.desc(), _t.c.name)
        if kind is not None:
            stmt = stmt.where(_t.c.kind == kind.value)
        with translate_store_errors("list inventory items"):
            rows = self._session.execute(stmt).all()
        return [self._to_domain(row) for row in rows]

    def add(self, item: InventoryItem) -> None:
        with translate_store_errors("insert an inventory item"):
            try:
                self._session.execute(insert(_t).values(**self._to_raw(item)))
            except IntegrityError as exc:
                raise ValidationError(
                    f"Inventory item '{item.id}' already exists"
                ) from exc

    def remove(self, item_id: str) -> Balance:
        stmt = (
            delete(_t)
            .where(_t.c.id == item_id)
            .returning(_t.c.quantity, _t.c.weight_g)
        )
        with translate_store_errors("delete an inventory item"):
            row = self._session.execute(stmt).first()
        if row is None:
            raise NotFoundError(f"Inventory item '{item_id}' not found")
        return Balance(row.quantity, row.weight_g)

    def adjust_balance(
        self, item_id: str, delta_quantity: int, delta_weight_kg: Decimal
    ) -> Balance:
        # One statement: the sufficiency check and the write cannot be
        # separated by another transaction's update.
        dq = literal(delta_quantity, Integer)
        dg = literal(kg_to_grams(delta_weight_kg), BigInteger)
        grams = type_coerce(_t.c.weight_g, BigInteger)
        stmt = (
            update(_t)
            .where(_t.c.id == item_id, _t.c.quantity + dq >= 0, grams + dg >= 0)
            .values(quantity=_t.c.quantity + dq, weight_g=grams + dg)
            .returning(_t.c.quantity, _t.c.weight_g)
        )
        with translate_store_errors("update a stock balance"):
            row = self._session.execute(stmt).first()

        if row is not None:
            return Balance(row.quantity, row.weight_g)

        current = self.get(item_id)
        if current is None:
            raise NotFoundError(f"Inventory item '{item_id}' not found")
        raise InsufficientStockError(
            item_id,
            requested=Balance(abs(delta_quantity), abs(delta_weight_kg)),
            available=current.balance,
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: InventoryItem) -> dict:
        raw = {
            "id": item.id,
            "kind": item.kind.value,
            "name": item.name,
            "quantity": item.quantity,
            "weight_g": item.weight_kg,
            "created_by": item.created_by,
            "created_at": item.created_at,
            "date_added": item.date_added,
        }
        if isinstance(item, RawMaterial):
            raw.update(
                material_type=item.material_type.value,
                supplier_id=item.supplier_id,
                invoice_number=item.invoice_number,
                material_form=item.material_form.value if item.material_form else None,
                size_width_cm=item.size_width_cm,
                gsm=item.gsm,
                bf=item.bf,
                rate_per_kg=item.rate_per_kg,
            )
        elif isinstance(item, FinishedGood):
            raw.update(
                customer_id=item.customer_id,
                length_cm=item.length_cm,
                width_cm=item.width_cm,
                height_cm=item.height_cm,
                number_of_ply=item.number_of_ply,
                unit_weight_g=item.unit_weight_kg,
                rate_per_piece=item.rate_per_piece,
            )
        return raw

    @staticmethod
    def _to_domain(row) -> InventoryItem:
        common = dict(
            id=row.id,
            name=row.name,
            quantity=row.quantity,
            weight_kg=row.weight_g,
            created_by=row.created_by,
            created_at=row.created_at,
            date_added=row.date_added,
        )
        if row.kind == ItemKind.FINISHED_GOOD.value:
            return FinishedGood(
                **common,
                customer_id=row.customer_id,
                length_cm=row.length_cm,
                width_cm=row.width_cm,
                height_cm=row.height_cm,
                number_of_ply=row.number_of_ply,
                unit_weight_kg=row.unit_weight_g,
                rate_per_piece=row.rate_per_piece,
            )
        return RawMaterial(
            **common,
            material_type=MaterialType(row.material_type),
            supplier_id=row.supplier_id,
            invoice_number=row.invoice_number,
            material_form=MaterialForm(row.material_form) if row.material_form else None,
            size_width_cm=row.size_width_cm,
            gsm=row.gsm,
            bf=row.bf,
            rate_per_kg=row.rate_per_kg,
        )
