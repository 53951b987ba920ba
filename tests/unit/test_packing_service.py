"""
Unit tests for PackingService.

Order-level calculations against the built-in catalog.
"""

import pytest
from decimal import Decimal

from services.packing_service import PackingService, get_packing_service
from models.calculate import OrderLineInput
from models.customer import OrderByUnit, PackType
from models.packing import CalculationPath, LineOverrides
from models.product import TubSize
from exceptions import (
    ConfigurationError,
    CustomerNotFoundError,
    ProductNotFoundError,
    UnitMismatchError,
)


@pytest.fixture
def service() -> PackingService:
    return PackingService()


def _line(product_id: str, quantity: str, **overrides) -> OrderLineInput:
    return OrderLineInput(
        product_id=product_id,
        quantity=Decimal(quantity),
        overrides=LineOverrides(**overrides) if overrides else None,
    )


# ===================
# CUSTOMER LOOKUP
# ===================

class TestResolveCustomer:

    def test_by_id(self, service, seed_snapshot):
        customer = service.resolve_customer("haji-baba", seed_snapshot)

        assert customer.name == "Haji Baba"

    @pytest.mark.parametrize("ref", ["Haji Baba", "haji baba", "  HAJI   BABA "])
    def test_by_name(self, service, seed_snapshot, ref):
        assert service.resolve_customer_id(ref, seed_snapshot) == "haji-baba"

    def test_unknown(self, service, seed_snapshot):
        with pytest.raises(CustomerNotFoundError) as exc_info:
            service.resolve_customer("Corner Shop", seed_snapshot)

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "CUSTOMER_NOT_FOUND"


# ===================
# SEED CUSTOMERS
# ===================

class TestSeedCustomers:
    """Worked examples for each customer convention."""

    def test_haji_baba_rounds_down_to_twenty(self, service, seed_snapshot):
        order = service.calculate_order("haji-baba", [_line("chicken-sausage", "8.3")], seed_snapshot)
        line = order.lines[0]

        assert line.path == CalculationPath.TRAY_WEIGHT
        assert line.trays == Decimal("20")
        assert line.weight_kg == Decimal("8.0")
        assert line.boxes == 1
        assert line.remainder_trays == Decimal("0")

    def test_lmc_meatballs_by_count(self, service, seed_snapshot):
        order = service.calculate_order("lmc", [_line("beef-meatballs", "45")], seed_snapshot)
        line = order.lines[0]

        assert line.path == CalculationPath.MEATBALL_PIECES
        assert line.order_by_unit == OrderByUnit.PIECE_COUNT
        assert line.tubs == 3
        assert line.boxes == 1
        assert line.weight_kg == Decimal("15")

    def test_lmc_veal_in_two_kg_tubs(self, service, seed_snapshot):
        order = service.calculate_order(
            "lmc",
            [_line("veal-sausage", "13", tub_size=TubSize.TWO_KG)],
            seed_snapshot,
        )
        line = order.lines[0]

        assert line.pack_type == PackType.TUB
        assert line.tub_size == TubSize.TWO_KG
        assert line.tubs == 7
        assert line.boxes == 1

    def test_halalnivore_five_kg_tubs(self, service, seed_snapshot):
        order = service.calculate_order("halalnivore", [_line("chicken-sausage-60g", "13")], seed_snapshot)
        line = order.lines[0]

        assert line.path == CalculationPath.TUB_WEIGHT
        assert line.tubs == 3
        assert line.boxes == 1
        assert line.remainder_tubs == 0

    def test_saffron_tray_count_no_boxes(self, service, seed_snapshot):
        order = service.calculate_order("saffron", [_line("beef-burger", "15")], seed_snapshot)
        line = order.lines[0]

        assert line.path == CalculationPath.TRAY_COUNT
        assert line.trays == Decimal("15")
        assert line.weight_kg == Decimal("15")
        assert line.boxes == 0

    def test_no_customer_uses_defaults(self, service, seed_snapshot):
        order = service.calculate_order(None, [_line("chicken-sausage", "8.3")], seed_snapshot)
        line = order.lines[0]

        assert order.customer_id is None
        assert line.trays == Decimal("21")
        assert line.boxes == 2
        assert line.weight_kg == Decimal("8.3")

    def test_customer_by_name(self, service, seed_snapshot):
        order = service.calculate_order("haji baba", [_line("chicken-sausage", "8.3")], seed_snapshot)

        assert order.customer_id == "haji-baba"
        assert order.customer_name == "Haji Baba"
        assert order.lines[0].trays == Decimal("20")


# ===================
# ORDERS
# ===================

class TestCalculateOrder:

    def test_lines_keep_input_order(self, service, seed_snapshot):
        items = [
            _line("veal-sausage", "10"),
            _line("beef-meatballs", "45"),
            _line("lamb-sausage", "0"),
        ]

        order = service.calculate_order("lmc", items, seed_snapshot)

        assert [line.product_id for line in order.lines] == [
            "veal-sausage", "beef-meatballs", "lamb-sausage"
        ]
        assert order.totals.item_count == 3
        assert order.totals.total_tubs == 2 + 3
        assert order.totals.total_boxes == 2

    def test_unknown_product(self, service, seed_snapshot):
        with pytest.raises(ProductNotFoundError) as exc_info:
            service.calculate_order("lmc", [_line("pork-pie", "1")], seed_snapshot)

        assert exc_info.value.details["id"] == "pork-pie"

    def test_unknown_customer(self, service, seed_snapshot):
        with pytest.raises(CustomerNotFoundError):
            service.calculate_order("nobody", [_line("chicken-sausage", "1")], seed_snapshot)

    def test_configuration_error_propagates(self, service, seed_snapshot):
        items = [
            _line("chicken-sausage", "1"),
            _line("veal-sausage", "5", pack_type=PackType.TUB, tub_size=TubSize.ONE_KG),
        ]

        with pytest.raises(ConfigurationError):
            service.calculate_order(None, items, seed_snapshot)

    def test_line_unit_override(self, service, seed_snapshot):
        order = service.calculate_order(
            "haji-baba",
            [_line("chicken-sausage", "25", order_by_unit=OrderByUnit.TRAY_COUNT)],
            seed_snapshot,
        )

        assert order.lines[0].trays == Decimal("25")
        assert order.lines[0].boxes == 2

    def test_snapshot_not_mutated(self, service, seed_snapshot):
        before = seed_snapshot.model_dump()

        service.calculate_order("lmc", [_line("beef-meatballs", "45")], seed_snapshot)

        assert seed_snapshot.model_dump() == before


class TestSingleton:

    def test_same_instance(self):
        assert get_packing_service() is get_packing_service()


def test_unit_mismatch_is_validation_error():
    error = UnitMismatchError("piece_count", "bare-1", "sausage", supported=["weight", "tray_count"])

    assert error.status_code == 422
    assert error.to_dict()["error"]["details"]["supported"] == ["weight", "tray_count"]
