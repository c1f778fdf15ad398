"""Domain service: Stock Mutation.

The only legitimate path for changing an inventory balance. Every
successful call changes exactly one balance and appends exactly one
ledger entry, inside a single unit of work; a failed call writes nothing.

The sequence per mutation:
  1. validate the amounts and the activity type;
  2. look the item up (kind and existence are immutable, so this read
     happens outside the write transaction);
  3. check the actor's permission;
  4. in one unit of work: conditional balance update (or insert, for a
     brand-new item), then ledger append.

Sufficiency is decided by the repository's conditional update, not by the
value read in step 2, so concurrent withdrawals cannot overdraw an item.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from decimal import Decimal

from boxstock.domain.exceptions import DomainException, NotFoundError, ValidationError
from boxstock.domain.model.inventory import FinishedGood, InventoryItem
from boxstock.domain.model.ledger import ActivityType, LedgerEntry
from boxstock.domain.model.value_objects import Balance, to_quantity, to_weight
from boxstock.domain.repository.unit_of_work import UnitOfWorkFactory
from boxstock.domain.service.access_policy import AccessPolicyGate
from boxstock.logging_config import get_logger

logger = get_logger("stock_mutation")


@dataclass(frozen=True)
class MutationResult:
    new_balance: Balance
    ledger_entry_id: str


class StockMutationService:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        access_gate: AccessPolicyGate,
    ) -> None:
        self._uow_factory = uow_factory
        self._access_gate = access_gate

    def apply_mutation(
        self,
        item_id: str,
        activity_type: ActivityType,
        quantity: int,
        weight_kg: Decimal | str | int,
        actor_id: str,
        notes: str | None = None,
        new_item: InventoryItem | None = None,
    ) -> MutationResult:
        """Apply one stock movement and record it.

        Args:
            item_id: The item to change.
            activity_type: Add increases the balance; Use, Convert,
                Dispatch and Wastage decrease it.
            quantity, weight_kg: Non-negative magnitudes of the movement.
                For finished goods the weight is derived from the piece
                count; pass 0 or the matching figure.
            actor_id: Who performs the movement.
            notes: Free text stored on the ledger entry.
            new_item: For Add on an id that does not exist yet, the item
                to create. Its own quantity/weight are replaced by the
                Add amounts.

        Raises:
            ValidationError, NotFoundError, InsufficientStockError,
            UnauthorizedError, StoreError.
        """
        log_fields = {
            "item_id": item_id,
            "activity_type": activity_type,
            "actor_id": actor_id,
        }
        try:
            result = self._apply(
                item_id, activity_type, quantity, weight_kg, actor_id, notes, new_item
            )
        except DomainException as exc:
            logger.warning(
                "mutation_rejected",
                extra={**log_fields, "error": type(exc).__name__, "reason": str(exc)},
            )
            raise

        logger.info(
            "mutation_applied",
            extra={
                **log_fields,
                "entry_id": result.ledger_entry_id,
                "quantity": result.new_balance.quantity,
                "weight_kg": result.new_balance.weight_kg,
            },
        )
        return result

    def remove_item(
        self, item_id: str, actor_id: str, notes: str | None = None
    ) -> MutationResult:
        """Delete an item and write a compensating ``Removed`` entry.

        The entry carries whatever balance the item held when it was
        deleted, so replaying the item's ledger still ends at zero.
        """
        item = self._lookup(item_id)
        if item is None:
            raise NotFoundError(f"Inventory item '{item_id}' not found")
        self._access_gate.authorize_activity(actor_id, ActivityType.REMOVED, item.kind)

        with self._uow_factory() as uow:
            final = uow.inventory.remove(item_id)
            entry_id = uow.ledger.append(
                LedgerEntry(
                    activity_type=ActivityType.REMOVED,
                    quantity=final.quantity,
                    weight_kg=final.weight_kg,
                    actor_id=actor_id,
                    item_id=item_id,
                    item_kind=item.kind,
                    notes=notes or f"Removed {item.name}",
                )
            )

        logger.info(
            "item_removed",
            extra={"item_id": item_id, "actor_id": actor_id, "entry_id": entry_id},
        )
        return MutationResult(Balance.empty(), entry_id)

    # --- Internal helpers -----------------------------------------------------

    def _apply(
        self,
        item_id: str,
        activity_type: ActivityType,
        quantity: int,
        weight_kg: Decimal | str | int,
        actor_id: str,
        notes: str | None,
        new_item: InventoryItem | None,
    ) -> MutationResult:
        if not isinstance(activity_type, ActivityType):
            raise ValidationError(f"Unknown activity type {activity_type!r}")
        if activity_type is ActivityType.REMOVED:
            raise ValidationError("Items are removed with remove_item, not apply_mutation")
        quantity = to_quantity(quantity)
        weight = to_weight(weight_kg)

        if new_item is not None:
            if activity_type is not ActivityType.ADD:
                raise ValidationError("Only an Add can create a new item")
            if new_item.id != item_id:
                raise ValidationError(
                    f"New item id '{new_item.id}' does not match '{item_id}'"
                )

        item = self._lookup(item_id)
        creating = item is None
        if creating:
            if activity_type is not ActivityType.ADD:
                raise NotFoundError(f"Inventory item '{item_id}' not found")
            if new_item is None:
                raise NotFoundError(
                    f"Inventory item '{item_id}' does not exist and no item "
                    "definition was given to create it"
                )
            item = new_item

        if not activity_type.applies_to(item.kind):
            raise ValidationError(
                f"{activity_type.value} does not apply to {item.kind.value.replace('_', ' ')}s"
            )
        weight = self._movement_weight(item, quantity, weight)
        if quantity == 0 and weight == 0:
            raise ValidationError("A stock movement needs a quantity or a weight")

        self._access_gate.authorize_activity(actor_id, activity_type, item.kind)

        entry = LedgerEntry(
            activity_type=activity_type,
            quantity=quantity,
            weight_kg=weight,
            actor_id=actor_id,
            item_id=item_id,
            item_kind=item.kind,
            notes=notes,
        )
        with self._uow_factory() as uow:
            if creating:
                created = dataclasses.replace(
                    item, quantity=quantity, weight_kg=weight, created_by=actor_id
                )
                uow.inventory.add(created)
                balance = created.balance
            else:
                sign = activity_type.sign
                balance = uow.inventory.adjust_balance(
                    item_id, sign * quantity, sign * weight
                )
            entry_id = uow.ledger.append(entry)

        return MutationResult(balance, entry_id)

    def _lookup(self, item_id: str) -> InventoryItem | None:
        with self._uow_factory() as uow:
            return uow.inventory.get(item_id)

    @staticmethod
    def _movement_weight(item: InventoryItem, quantity: int, weight: Decimal) -> Decimal:
        """Finished goods weigh ``pieces * unit weight``; anything else is
        taken as given."""
        if not isinstance(item, FinishedGood):
            return weight
        derived = item.weight_of(quantity)
        if weight not in (Decimal("0"), derived):
            raise ValidationError(
                f"Weight {weight} kg does not match {quantity} pcs of {item.name} "
                f"({derived} kg)"
            )
        return derived
