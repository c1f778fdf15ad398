"""Abstract repository for wastage sales."""

from __future__ import annotations

from abc import ABC, abstractmethod

from boxstock.domain.model.wastage import WastageSale


class WastageSaleRepository(ABC):

    @abstractmethod
    def add(self, sale: WastageSale) -> None:
        """Persist a new wastage sale."""

    @abstractmethod
    def list_all(self) -> list[WastageSale]:
        """Return every sale, most recent sale date first."""
