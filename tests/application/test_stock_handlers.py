"""Integration tests for the stock movement use cases."""

from decimal import Decimal

import pytest

from boxstock.application.add_finished_good import AddFinishedGoodHandler
from boxstock.application.add_raw_material import AddRawMaterialHandler
from boxstock.application.convert_stock import ConvertStockHandler
from boxstock.application.dispatch_finished_good import DispatchFinishedGoodHandler
from boxstock.application.record_wastage_sale import RecordWastageSaleHandler
from boxstock.application.remove_item import RemoveItemHandler
from boxstock.application.restock_item import RestockItemHandler
from boxstock.application.use_stock import UseStockHandler
from boxstock.application.write_off_stock import WriteOffStockHandler
from boxstock.domain.exceptions import InsufficientStockError, ValidationError
from boxstock.domain.model.inventory import MaterialForm, MaterialType
from boxstock.domain.model.ledger import ActivityType
from boxstock.domain.model.permissions import Actor, Role
from boxstock.domain.model.value_objects import Money
from boxstock.domain.service.access_policy import AccessPolicyGate
from boxstock.domain.service.stock_mutation_service import StockMutationService
from boxstock.domain.service.wastage_sale_service import WastageSaleService
from tests.fakes import FakeActorRepository, InMemoryStore


def _setup():
    store = InMemoryStore()
    gate = AccessPolicyGate(FakeActorRepository([Actor(id="admin", full_name="Asha", role=Role.ADMIN)]))
    service = StockMutationService(store.uow_factory(), gate)
    return store, service, gate


def _add_reel(service, weight="100", quantity=2):
    return AddRawMaterialHandler(service).handle(
        actor_id="admin",
        name="Kraft 120gsm",
        material_type=MaterialType.PAPER,
        weight_kg=weight,
        quantity=quantity,
        supplier_id="sup-1",
        material_form=MaterialForm.REEL,
        gsm=120,
        bf=18,
        rate_per_kg=Money.of("38.50"),
    )


def _add_boxes(service, quantity=100):
    return AddFinishedGoodHandler(service).handle(
        actor_id="admin",
        box_name="Shipper",
        quantity=quantity,
        unit_weight_kg="0.35",
        customer_id="cust-1",
        length_cm=Decimal("30"),
        width_cm=Decimal("20"),
        height_cm=Decimal("15"),
        number_of_ply=5,
    )


class TestAddHandlers:

    def test_add_raw_material(self):
        store, service, _ = _setup()

        dto = _add_reel(service)

        item = store.items[dto.item_id]
        assert item.gsm == 120
        assert item.material_form is MaterialForm.REEL
        assert (dto.quantity, dto.weight_kg) == (2, "100.000")
        (entry,) = store.entries
        assert entry.activity_type is ActivityType.ADD
        assert entry.notes == "Added Kraft 120gsm"
        assert dto.ledger_entry_id == entry.id

    def test_add_finished_good_derives_weight(self):
        store, service, _ = _setup()
        dto = _add_boxes(service, quantity=100)
        assert store.items[dto.item_id].weight_kg == Decimal("35.000")

    def test_add_finished_good_notes(self):
        store, svc, _ = _setup()
        dto = _add_boxes(svc)
        assert store.entries[0].notes == "Added Shipper (30×15×20cm, 5 ply)"
        assert dto.weight_kg == "35.000"

    def test_add_rejects_blank_name(self):
        store, service, _ = _setup()
        with pytest.raises(ValidationError):
            AddRawMaterialHandler(service).handle(
                actor_id="admin", name=" ", material_type=MaterialType.PAPER, weight_kg="1"
            )
        assert store.entries == []


class TestMovementHandlers:

    def test_restock(self):
        store, service, _ = _setup()
        dto = _add_reel(service)

        out = RestockItemHandler(service).handle("admin", dto.item_id, quantity=1, weight_kg="50")

        assert (out.quantity, out.weight_kg) == (3, "150.000")

    def test_use(self):
        store, service, _ = _setup()
        dto = _add_reel(service)

        out = UseStockHandler(service).handle("admin", dto.item_id, weight_kg="30", purpose="Order 42")

        assert out.weight_kg == "70.000"
        assert store.entries[-1].notes == "Order 42"

    def test_convert_notes_target(self):
        store, service, _ = _setup()
        dto = _add_reel(service)

        ConvertStockHandler(service).handle("admin", dto.item_id, weight_kg="20", conversion_type=" Sheet ")

        assert store.entries[-1].activity_type is ActivityType.CONVERT
        assert store.entries[-1].notes == "Converted to Sheet"

    def test_convert_needs_target(self):
        store, service, _ = _setup()
        dto = _add_reel(service)
        with pytest.raises(ValidationError, match="Conversion target"):
            ConvertStockHandler(service).handle("admin", dto.item_id, weight_kg="20", conversion_type="")
        assert len(store.entries) == 1

    def test_dispatch(self):
        store, service, _ = _setup()
        dto = _add_boxes(service, quantity=100)

        out = DispatchFinishedGoodHandler(service).handle("admin", dto.item_id, quantity=40)

        assert (out.quantity, out.weight_kg) == (60, "21.000")
        assert store.entries[-1].weight_kg == Decimal("14.000")

    def test_dispatch_too_many(self):
        _, service, _ = _setup()
        dto = _add_boxes(service, quantity=10)
        with pytest.raises(InsufficientStockError):
            DispatchFinishedGoodHandler(service).handle("admin", dto.item_id, quantity=11)

    def test_write_off(self):
        store, service, _ = _setup()
        dto = _add_boxes(service, quantity=10)

        out = WriteOffStockHandler(service).handle("admin", dto.item_id, quantity=2, reason="Crushed")

        assert out.quantity == 8
        assert out.activity_type == "Wastage"
        assert store.entries[-1].notes == "Crushed"

    def test_remove(self):
        store, service, _ = _setup()
        dto = _add_reel(service)

        out = RemoveItemHandler(service).handle("admin", dto.item_id)

        assert dto.item_id not in store.items
        assert out.activity_type == "Removed"
        assert (out.quantity, out.weight_kg) == (0, "0.000")


class TestRecordWastageSale:

    def test_record(self):
        store, _, gate = _setup()
        handler = RecordWastageSaleHandler(WastageSaleService(store.uow_factory(), gate))

        dto = handler.handle("admin", "Trimmings", weight_kg="80", sale_amount="960", quantity=4)

        assert dto.weight_kg == "80.000"
        assert dto.sale_amount == "₹960.00"
        assert dto.rate_per_kg == "₹12.00"
        assert store.entries[0].activity_type is ActivityType.WASTAGE

    def test_bad_amount(self):
        store, _, gate = _setup()
        handler = RecordWastageSaleHandler(WastageSaleService(store.uow_factory(), gate))
        with pytest.raises(ValidationError):
            handler.handle("admin", "Trimmings", weight_kg="80", sale_amount="lots")
        assert store.sales == []
