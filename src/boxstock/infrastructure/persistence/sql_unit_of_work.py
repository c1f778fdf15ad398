"""SQL unit of work: one Session, one transaction.

Mirrors the usual session-scope pattern: commit on a clean exit,
rollback on any exception, always close.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from boxstock.domain.clock import Clock
from boxstock.domain.exceptions import StoreError
from boxstock.domain.repository.unit_of_work import UnitOfWork
from boxstock.infrastructure.persistence.sql_inventory_repository import (
    SqlInventoryRepository,
)
from boxstock.infrastructure.persistence.sql_ledger_store import SqlLedgerStore
from boxstock.infrastructure.persistence.sql_wastage_repository import (
    SqlWastageSaleRepository,
)
from boxstock.logging_config import get_logger

logger = get_logger("db.uow")


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session], clock: Clock) -> None:
        self._session_factory = session_factory
        self._clock = clock
        self.session: Session | None = None

    def _begin(self) -> None:
        self.session = self._session_factory()
        self.inventory = SqlInventoryRepository(self.session)
        self.ledger = SqlLedgerStore(self.session, self._clock)
        self.wastage = SqlWastageSaleRepository(self.session)

    def _commit(self) -> None:
        try:
            self.session.commit()
            logger.debug("transaction_committed")
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.warning("transaction_commit_failed", exc_info=True)
            raise StoreError("Storage failure while committing; nothing was saved") from exc
        finally:
            self._close()

    def _rollback(self) -> None:
        try:
            self.session.rollback()
            logger.debug("transaction_rolled_back")
        finally:
            self._close()

    def _close(self) -> None:
        try:
            self.session.close()
        finally:
            self.session = None
