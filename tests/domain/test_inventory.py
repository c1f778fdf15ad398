"""Unit tests for inventory items."""

from decimal import Decimal

import pytest

from boxstock.domain.exceptions import ValidationError
from boxstock.domain.model.inventory import FinishedGood, ItemKind, MaterialType, RawMaterial
from boxstock.domain.model.permissions import Module
from boxstock.domain.model.value_objects import Balance, Money


def _reel(**overrides) -> RawMaterial:
    fields = dict(
        id="rm-1",
        name="Kraft 120gsm",
        material_type=MaterialType.PAPER,
        supplier_id="sup-1",
        quantity=2,
        weight_kg=Decimal("100"),
    )
    fields.update(overrides)
    return RawMaterial(**fields)


def _box(**overrides) -> FinishedGood:
    fields = dict(
        id="fg-1",
        name="5-ply shipper",
        customer_id="cust-1",
        length_cm=Decimal("30"),
        width_cm=Decimal("20"),
        height_cm=Decimal("15"),
        number_of_ply=5,
        unit_weight_kg=Decimal("0.25"),
        quantity=10,
    )
    fields.update(overrides)
    return FinishedGood(**fields)


class TestInventoryItemValidation:

    def test_name_is_stripped(self):
        assert _reel(name="  Kraft  ").name == "Kraft"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            _reel(name="   ")

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError, match="id is required"):
            _reel(id="")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _reel(quantity=-1)

    def test_weight_normalized_to_grams(self):
        assert _reel(weight_kg="12.3456").weight_kg == Decimal("12.346")

    def test_box_needs_positive_unit_weight(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _box(unit_weight_kg=Decimal("0"))

    def test_box_needs_positive_ply(self):
        with pytest.raises(ValidationError, match="ply"):
            _box(number_of_ply=0)

    def test_box_rejects_negative_dimensions(self):
        with pytest.raises(ValidationError, match="dimensions"):
            _box(length_cm=Decimal("-1"))


class TestKinds:

    def test_kinds(self):
        assert _reel().kind is ItemKind.RAW_MATERIAL
        assert _box().kind is ItemKind.FINISHED_GOOD

    def test_module_per_kind(self):
        assert ItemKind.RAW_MATERIAL.module is Module.RAW_MATERIALS
        assert ItemKind.FINISHED_GOOD.module is Module.FINISHED_GOODS

    def test_counterpart(self):
        assert _reel().counterpart_id == "sup-1"
        assert _box().counterpart_id == "cust-1"


class TestBalance:

    def test_balance_snapshot(self):
        assert _reel().balance == Balance(2, Decimal("100.000"))

    def test_empty_balance(self):
        assert _reel(quantity=0, weight_kg=Decimal("0")).balance == Balance.empty()


class TestFigures:

    def test_raw_material_amount_is_rate_times_weight(self):
        reel = _reel(rate_per_kg=Money.of("38.50"))
        assert reel.total_amount == Money.of("3850.00")

    def test_amount_without_rate_is_zero(self):
        assert _reel().total_amount == Money.zero()

    def test_box_weight_from_pieces(self):
        box = _box()
        assert box.weight_of(4) == Decimal("1.000")
        assert box.total_weight_kg == Decimal("2.500")

    def test_box_amount_is_rate_times_pieces(self):
        assert _box(rate_per_piece=Money.of("12.75")).total_amount == Money.of("127.50")

    def test_box_dimensions(self):
        assert _box().dimensions == "30×15×20cm"
