"""Abstract repository for inventory items.

The only component allowed to change a stored balance. Implementations
must apply ``adjust_balance`` as one conditional storage operation so that
two concurrent withdrawals cannot both pass a stale sufficiency check.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from boxstock.domain.exceptions import NotFoundError
from boxstock.domain.model.inventory import InventoryItem, ItemKind
from boxstock.domain.model.value_objects import Balance


class InventoryRepository(ABC):

    @abstractmethod
    def get(self, item_id: str) -> InventoryItem | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, kind: ItemKind | None = None) -> list[InventoryItem]:
        """Return every item, optionally only those of one kind."""

    @abstractmethod
    def add(self, item: InventoryItem) -> None:
        """Insert a new item together with its opening balance."""

    @abstractmethod
    def remove(self, item_id: str) -> Balance:
        """Hard-delete an item row and return the balance it held.

        Raises NotFoundError if the item does not exist.
        """

    @abstractmethod
    def adjust_balance(
        self, item_id: str, delta_quantity: int, delta_weight_kg: Decimal
    ) -> Balance:
        """Apply signed deltas atomically and return the new balance.

        Raises InsufficientStockError if either measure would go negative,
        NotFoundError if the item does not exist.
        """

    def get_balance(self, item_id: str) -> Balance:
        item = self.get(item_id)
        if item is None:
            raise NotFoundError(f"Inventory item '{item_id}' not found")
        return item.balance
