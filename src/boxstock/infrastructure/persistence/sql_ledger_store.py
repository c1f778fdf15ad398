"""SQL implementation of LedgerStore."""

from __future__ import annotations

from typing import Iterator
from uuid import uuid4

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from boxstock.domain.clock import Clock
from boxstock.domain.model.inventory import ItemKind
from boxstock.domain.model.ledger import ActivityType, LedgerEntry, LedgerFilter
from boxstock.domain.repository.ledger_store import LedgerQuery, LedgerStore
from boxstock.infrastructure.persistence.sql_engine import translate_store_errors
from boxstock.infrastructure.persistence.sql_schema import stock_logs

_t = stock_logs


class SqlLedgerStore(LedgerStore):

    def __init__(self, session: Session, clock: Clock) -> None:
        self._session = session
        self._clock = clock

    def append(self, entry: LedgerEntry) -> str:
        entry_id = str(uuid4())
        values = {
            "id": entry_id,
            "item_id": entry.item_id,
            "item_kind": entry.item_kind.value if entry.item_kind else None,
            "activity_type": entry.activity_type.value,
            "quantity": entry.quantity,
            "weight_g": entry.weight_kg,
            "actor_id": entry.actor_id,
            "notes": entry.notes,
            "timestamp": self._clock.now(),
        }
        with translate_store_errors("append a ledger entry"):
            self._session.execute(insert(_t).values(**values))
        return entry_id

    def query(self, criteria: LedgerFilter | None = None) -> LedgerQuery:
        criteria = criteria or LedgerFilter()
        stmt = select(_t)
        if criteria.item_id is not None:
            stmt = stmt.where(_t.c.item_id == criteria.item_id)
        if criteria.activity_types:
            stmt = stmt.where(
                _t.c.activity_type.in_(sorted(a.value for a in criteria.activity_types))
            )
        if criteria.actor_id is not None:
            stmt = stmt.where(_t.c.actor_id == criteria.actor_id)
        if criteria.since is not None:
            stmt = stmt.where(_t.c.timestamp >= criteria.since)
        if criteria.until is not None:
            stmt = stmt.where(_t.c.timestamp < criteria.until)

        if criteria.oldest_first:
            stmt = stmt.order_by(_t.c.timestamp.asc(), _t.c.sequence.asc())
        else:
            stmt = stmt.order_by(_t.c.timestamp.desc(), _t.c.sequence.desc())
        if criteria.limit is not None:
            stmt = stmt.limit(criteria.limit)

        return SqlLedgerQuery(self._session.get_bind(), stmt)


class SqlLedgerQuery(LedgerQuery):
    """Runs ``statement`` on a fresh connection every time it is iterated,
    independent of the unit of work that created it."""

    def __init__(self, engine: Engine, statement) -> None:
        self._engine = engine
        self._statement = statement

    def __iter__(self) -> Iterator[LedgerEntry]:
        with translate_store_errors("query the stock ledger"):
            with self._engine.connect() as conn:
                rows = conn.execute(self._statement).all()
        for row in rows:
            yield _to_domain(row)


def _to_domain(row) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,
        sequence=row.sequence,
        item_id=row.item_id,
        item_kind=ItemKind(row.item_kind) if row.item_kind else None,
        activity_type=ActivityType(row.activity_type),
        quantity=row.quantity,
        weight_kg=row.weight_g,
        actor_id=row.actor_id,
        notes=row.notes,
        timestamp=row.timestamp,
    )
