"""Abstract unit of work — one storage transaction across repositories.

    with uow_factory() as uow:
        uow.inventory.adjust_balance(...)
        uow.ledger.append(...)

Leaving the block normally commits; leaving it through any exception
(cancellation included) rolls everything back, so a balance change and
its ledger entry are never observed apart.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from boxstock.domain.repository.inventory_repository import InventoryRepository
from boxstock.domain.repository.ledger_store import LedgerStore
from boxstock.domain.repository.wastage_repository import WastageSaleRepository


class UnitOfWork(ABC):

    inventory: InventoryRepository
    ledger: LedgerStore
    wastage: WastageSaleRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self._commit()
        else:
            self._rollback()
        # False -> exception keeps propagating
        return False

    @abstractmethod
    def _begin(self) -> None:
        ...

    @abstractmethod
    def _commit(self) -> None:
        ...

    @abstractmethod
    def _rollback(self) -> None:
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
