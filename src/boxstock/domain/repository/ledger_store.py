"""Abstract append-only store for ledger entries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from boxstock.domain.model.ledger import LedgerEntry, LedgerFilter


class LedgerStore(ABC):

    @abstractmethod
    def append(self, entry: LedgerEntry) -> str:
        """Persist a new entry and return its assigned id.

        The store assigns ``id``, ``sequence`` and ``timestamp``; values on
        the passed entry for those fields are ignored.
        """

    @abstractmethod
    def query(self, criteria: LedgerFilter | None = None) -> LedgerQuery:
        """Return a lazy, restartable view of the matching entries."""


class LedgerQuery(ABC):
    """Iterable query result. Each iteration runs the query again, so a
    second pass sees entries appended in between."""

    @abstractmethod
    def __iter__(self) -> Iterator[LedgerEntry]:
        ...

    def all(self) -> list[LedgerEntry]:
        return list(self)
