"""Tests for the stock mutation service: the only path that changes a balance."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from boxstock.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from boxstock.domain.model.inventory import FinishedGood, ItemKind, MaterialType, RawMaterial
from boxstock.domain.model.ledger import ActivityType, LedgerFilter, replay_balance
from boxstock.domain.model.permissions import Actor, PermissionMatrix, Role
from boxstock.domain.model.value_objects import Balance
from boxstock.domain.service.access_policy import AccessPolicyGate
from boxstock.domain.service.stock_mutation_service import StockMutationService
from tests.fakes import FakeActorRepository, FakeLedgerStore, InMemoryStore

ACTORS = [
    Actor(id="admin", full_name="Asha", role=Role.ADMIN),
    Actor(
        id="store",
        full_name="Ravi",
        permissions=PermissionMatrix.of(
            "rawMaterials:add", "rawMaterials:modify",
            "finishedGoods:add", "finishedGoods:modify",
        ),
    ),
    Actor(id="viewer", full_name="Vik", permissions=PermissionMatrix.of("rawMaterials:view")),
]


def _reel(weight="100", quantity=0, item_id="rm-1") -> RawMaterial:
    return RawMaterial(
        id=item_id,
        name="Kraft 120gsm",
        material_type=MaterialType.PAPER,
        supplier_id="sup-1",
        quantity=quantity,
        weight_kg=Decimal(weight),
    )


def _box(quantity=10, item_id="fg-1") -> FinishedGood:
    return FinishedGood(
        id=item_id,
        name="Shipper",
        customer_id="cust-1",
        unit_weight_kg=Decimal("0.25"),
        quantity=quantity,
        weight_kg=Decimal("0.25") * quantity,
    )


def _setup(*items):
    store = InMemoryStore()
    store.seed(*items)
    service = StockMutationService(
        store.uow_factory(), AccessPolicyGate(FakeActorRepository(ACTORS))
    )
    return store, service


def _race(n, fn):
    """Run ``fn`` on ``n`` threads released together; return results or exceptions."""
    barrier = threading.Barrier(n)

    def run():
        barrier.wait()
        return fn()

    with ThreadPoolExecutor(max_workers=n) as pool:
        futures = [pool.submit(run) for _ in range(n)]
    return [f.exception() or f.result() for f in futures]


# ── Scenarios ────────────────────────────────────────────────────────────────


class TestScenarios:

    def test_a_use_reduces_balance_and_logs_once(self):
        store, service = _setup(_reel("100"))

        result = service.apply_mutation("rm-1", ActivityType.USE, 0, "30", "store")

        assert result.new_balance.weight_kg == Decimal("70.000")
        assert store.items["rm-1"].weight_kg == Decimal("70.000")
        assert len(store.entries) == 1
        entry = store.entries[0]
        assert entry.activity_type is ActivityType.USE
        assert entry.weight_kg == Decimal("30.000")
        assert entry.item_id == "rm-1"
        assert entry.actor_id == "store"
        assert entry.id == result.ledger_entry_id

    def test_b_overdraw_fails_and_writes_nothing(self):
        store, service = _setup(_reel("100"))
        service.apply_mutation("rm-1", ActivityType.USE, 0, "30", "store")

        with pytest.raises(InsufficientStockError):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "80", "store")

        assert store.items["rm-1"].weight_kg == Decimal("70.000")
        assert len(store.entries) == 1

    def test_overdraw_reports_available_balance(self):
        _, service = _setup(_reel("100"))

        with pytest.raises(ValidationError) as info:
            service.apply_mutation("rm-1", ActivityType.USE, 0, "100.001", "store")

        assert isinstance(info.value, InsufficientStockError)
        assert info.value.item_id == "rm-1"
        assert info.value.available == Balance(0, Decimal("100.000"))

    def test_c_concurrent_withdrawals_only_one_wins(self):
        store, service = _setup(_reel("100"))

        outcomes = _race(
            2, lambda: service.apply_mutation("rm-1", ActivityType.USE, 0, "60", "store")
        )

        failures = [o for o in outcomes if isinstance(o, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientStockError)
        assert store.items["rm-1"].weight_kg == Decimal("40.000")
        assert len(store.entries) == 1

    def test_d_add_creates_new_item(self):
        store, service = _setup()
        new = _reel("0", item_id="rm-new")

        result = service.apply_mutation(
            "rm-new", ActivityType.ADD, 0, "50", "store", new_item=new
        )

        assert result.new_balance == Balance(0, Decimal("50.000"))
        created = store.items["rm-new"]
        assert created.weight_kg == Decimal("50.000")
        assert created.created_by == "store"
        assert [e.activity_type for e in store.entries] == [ActivityType.ADD]


# ── Invariants ───────────────────────────────────────────────────────────────


class TestLedgerConsistency:

    def test_replay_reproduces_balance(self):
        store, service = _setup()
        service.apply_mutation("rm-1", ActivityType.ADD, 3, "150", "store", new_item=_reel("0"))
        service.apply_mutation("rm-1", ActivityType.USE, 1, "40.25", "store")
        service.apply_mutation("rm-1", ActivityType.CONVERT, 0, "12.5", "store")
        service.apply_mutation("rm-1", ActivityType.ADD, 1, "20", "store")
        service.apply_mutation("rm-1", ActivityType.WASTAGE, 0, "0.75", "store")
        with pytest.raises(InsufficientStockError):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "1000", "store")

        entries = FakeLedgerStore(store).query(LedgerFilter(item_id="rm-1", oldest_first=True))
        assert replay_balance(entries) == store.items["rm-1"].balance
        assert store.items["rm-1"].balance == Balance(3, Decimal("116.500"))

    def test_one_entry_per_success_none_per_failure(self):
        store, service = _setup(_reel("10"))
        attempts = [("1", "store"), ("20", "store"), ("2", "viewer"), ("3", "store"), ("-1", "store")]
        successes = 0
        for weight, actor in attempts:
            try:
                service.apply_mutation("rm-1", ActivityType.USE, 0, weight, actor)
            except (InsufficientStockError, UnauthorizedError, ValidationError):
                continue
            successes += 1

        assert successes == 2
        assert len(store.entries) == 2
        assert store.items["rm-1"].weight_kg == Decimal("6.000")

    def test_many_concurrent_withdrawals_never_overdraw(self):
        store, service = _setup(_reel("100"))

        outcomes = _race(
            10, lambda: service.apply_mutation("rm-1", ActivityType.USE, 0, "15", "store")
        )

        wins = [o for o in outcomes if not isinstance(o, Exception)]
        losses = [o for o in outcomes if isinstance(o, Exception)]
        assert len(wins) == 6
        assert all(isinstance(o, InsufficientStockError) for o in losses)
        assert store.items["rm-1"].weight_kg == Decimal("10.000")
        assert len(store.entries) == 6

    def test_store_failure_rolls_back_balance(self):
        store, service = _setup(_reel("100"))
        store.fail_appends = True

        with pytest.raises(StoreError):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "30", "store")

        assert store.items["rm-1"].weight_kg == Decimal("100.000")
        assert store.entries == []
        assert store.rollbacks == 1

    def test_interrupt_mid_transaction_rolls_back(self, monkeypatch):
        store, service = _setup(_reel("100"))

        def interrupted(self, entry):
            raise KeyboardInterrupt

        monkeypatch.setattr(FakeLedgerStore, "append", interrupted)
        with pytest.raises(KeyboardInterrupt):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "30", "store")

        assert store.items["rm-1"].weight_kg == Decimal("100.000")

    def test_failed_create_leaves_no_item(self):
        store, service = _setup()
        store.fail_appends = True

        with pytest.raises(StoreError):
            service.apply_mutation("rm-new", ActivityType.ADD, 0, "5", "store", new_item=_reel("0", item_id="rm-new"))

        assert "rm-new" not in store.items


# ── Validation ───────────────────────────────────────────────────────────────


class TestValidation:

    def test_negative_weight_rejected(self):
        store, service = _setup(_reel())
        with pytest.raises(ValidationError, match="cannot be negative"):
            service.apply_mutation("rm-1", ActivityType.ADD, 0, "-5", "store")
        assert store.entries == []

    def test_negative_quantity_rejected(self):
        _, service = _setup(_reel())
        with pytest.raises(ValidationError):
            service.apply_mutation("rm-1", ActivityType.ADD, -1, "5", "store")

    def test_empty_movement_rejected(self):
        _, service = _setup(_reel())
        with pytest.raises(ValidationError, match="needs a quantity or a weight"):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "0", "store")

    def test_unknown_activity_rejected(self):
        _, service = _setup(_reel())
        with pytest.raises(ValidationError, match="Unknown activity type"):
            service.apply_mutation("rm-1", "Use", 0, "1", "store")  # type: ignore[arg-type]

    def test_removed_not_accepted_here(self):
        _, service = _setup(_reel())
        with pytest.raises(ValidationError, match="remove_item"):
            service.apply_mutation("rm-1", ActivityType.REMOVED, 0, "1", "admin")

    def test_missing_item(self):
        store, service = _setup()
        with pytest.raises(NotFoundError):
            service.apply_mutation("nope", ActivityType.USE, 0, "1", "store")
        assert store.entries == []

    def test_add_on_missing_item_without_definition(self):
        store, service = _setup()
        with pytest.raises(NotFoundError, match="no item definition"):
            service.apply_mutation("nope", ActivityType.ADD, 0, "1", "store")
        assert store.items == {}
        assert store.entries == []

    def test_new_item_only_with_add(self):
        _, service = _setup()
        with pytest.raises(ValidationError, match="Only an Add"):
            service.apply_mutation(
                "rm-1", ActivityType.USE, 0, "1", "store", new_item=_reel()
            )

    def test_new_item_id_must_match(self):
        _, service = _setup()
        with pytest.raises(ValidationError, match="does not match"):
            service.apply_mutation(
                "rm-2", ActivityType.ADD, 0, "1", "store", new_item=_reel()
            )

    def test_add_with_definition_for_existing_item_restocks(self):
        store, service = _setup(_reel("10"))
        service.apply_mutation("rm-1", ActivityType.ADD, 0, "5", "store", new_item=_reel("999"))
        assert store.items["rm-1"].weight_kg == Decimal("15.000")

    def test_dispatch_not_for_raw_materials(self):
        _, service = _setup(_reel())
        with pytest.raises(ValidationError, match="does not apply to raw materials"):
            service.apply_mutation("rm-1", ActivityType.DISPATCH, 1, "0", "store")

    def test_use_not_for_finished_goods(self):
        _, service = _setup(_box())
        with pytest.raises(ValidationError, match="does not apply to finished goods"):
            service.apply_mutation("fg-1", ActivityType.USE, 1, "0", "store")


class TestFinishedGoods:

    def test_dispatch_derives_weight(self):
        store, service = _setup(_box(quantity=10))

        result = service.apply_mutation("fg-1", ActivityType.DISPATCH, 4, 0, "store")

        assert result.new_balance == Balance(6, Decimal("1.500"))
        assert store.entries[0].weight_kg == Decimal("1.000")

    def test_matching_weight_accepted(self):
        _, service = _setup(_box(quantity=10))
        result = service.apply_mutation("fg-1", ActivityType.DISPATCH, 4, "1.000", "store")
        assert result.new_balance.quantity == 6

    def test_mismatching_weight_rejected(self):
        _, service = _setup(_box(quantity=10))
        with pytest.raises(ValidationError, match="does not match 4 pcs"):
            service.apply_mutation("fg-1", ActivityType.DISPATCH, 4, "3", "store")

    def test_dispatch_more_than_on_hand(self):
        store, service = _setup(_box(quantity=3))
        with pytest.raises(InsufficientStockError):
            service.apply_mutation("fg-1", ActivityType.DISPATCH, 4, 0, "store")
        assert store.items["fg-1"].quantity == 3


class TestAuthorization:

    def test_viewer_cannot_use(self):
        store, service = _setup(_reel("100"))
        with pytest.raises(UnauthorizedError):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "1", "viewer")
        assert store.items["rm-1"].weight_kg == Decimal("100.000")
        assert store.entries == []

    def test_unknown_actor(self):
        _, service = _setup(_reel("100"))
        with pytest.raises(UnauthorizedError, match="Unknown actor"):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "1", "ghost")

    def test_authorization_uses_item_kind(self):
        _, service = _setup(_box())
        with pytest.raises(UnauthorizedError, match="finishedGoods"):
            service.apply_mutation("fg-1", ActivityType.DISPATCH, 1, 0, "viewer")


class TestRemoveItem:

    def test_remove_writes_compensating_entry(self):
        store, service = _setup()
        service.apply_mutation("rm-1", ActivityType.ADD, 2, "100", "admin", new_item=_reel("0"))
        service.apply_mutation("rm-1", ActivityType.USE, 0, "30", "admin")

        result = service.remove_item("rm-1", "admin")

        assert "rm-1" not in store.items
        removed = store.entries[-1]
        assert removed.activity_type is ActivityType.REMOVED
        assert removed.id == result.ledger_entry_id
        assert (removed.quantity, removed.weight_kg) == (2, Decimal("70.000"))
        assert removed.notes == "Removed Kraft 120gsm"
        assert removed.item_kind is ItemKind.RAW_MATERIAL
        assert replay_balance(
            FakeLedgerStore(store).query(LedgerFilter(item_id="rm-1", oldest_first=True))
        ) == Balance.empty()

    def test_remove_needs_delete_permission(self):
        store, service = _setup(_reel())
        with pytest.raises(UnauthorizedError):
            service.remove_item("rm-1", "store")
        assert "rm-1" in store.items
        assert store.entries == []

    def test_remove_missing_item(self):
        _, service = _setup()
        with pytest.raises(NotFoundError):
            service.remove_item("nope", "admin")


class TestLogging:

    def test_success_logged(self, caplog):
        _, service = _setup(_reel("100"))
        caplog.set_level(logging.INFO, logger="boxstock")

        result = service.apply_mutation("rm-1", ActivityType.USE, 0, "30", "store")

        record = next(r for r in caplog.records if r.getMessage() == "mutation_applied")
        assert record.item_id == "rm-1"
        assert record.entry_id == result.ledger_entry_id

    def test_rejection_logged_as_warning(self, caplog):
        _, service = _setup(_reel("10"))
        caplog.set_level(logging.INFO, logger="boxstock")

        with pytest.raises(InsufficientStockError):
            service.apply_mutation("rm-1", ActivityType.USE, 0, "30", "store")

        record = next(r for r in caplog.records if r.getMessage() == "mutation_rejected")
        assert record.levelno == logging.WARNING
        assert record.error == "InsufficientStockError"
