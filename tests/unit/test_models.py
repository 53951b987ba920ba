"""
Unit tests for catalog and rule schemas.
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from models.product import ProductCategory, ProductDefinition, TubPackaging, TubSize
from models.customer import CustomerPackagingRule, PackType, RoundingPolicy
from tests.factories import ProductFactory, RuleFactory


class TestProductDefinition:

    def test_meatball_requires_count_per_tub(self):
        with pytest.raises(ValidationError):
            ProductDefinition(id="mb", name="Meatballs", category=ProductCategory.MEATBALL)

    def test_count_per_tub_only_for_meatballs(self):
        with pytest.raises(ValidationError):
            ProductDefinition(
                id="s", name="Sausage", category=ProductCategory.SAUSAGE, count_per_tub=20
            )

    @pytest.mark.parametrize("field,value", [
        ("tray_weight_kg", Decimal("0")),
        ("trays_per_box", 0),
        ("patty_weight_kg", Decimal("-0.1")),
    ])
    def test_packaging_values_positive(self, field, value):
        with pytest.raises(ValidationError):
            ProductFactory.create_bare(**{field: value})

    def test_tub_size_keys_from_strings(self):
        product = ProductDefinition(
            id="s",
            name="Sausage",
            category="sausage",
            tub_packaging={"2kg": {"weight_kg": "2", "tubs_per_box": 7}},
        )

        assert product.tub(TubSize.TWO_KG).tubs_per_box == 7

    def test_missing_tub_size_is_empty(self):
        product = ProductFactory.create_bare()

        assert product.tub(TubSize.ONE_KG) == TubPackaging()

    def test_frozen(self, sausage):
        with pytest.raises(ValidationError):
            sausage.trays_per_box = 10

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ProductDefinition(id="s", name="S", category="sausage", colour="red")


class TestCustomerPackagingRule:

    def test_customer_wide(self):
        assert RuleFactory.create().is_customer_wide
        assert not RuleFactory.create(product_id="beef-sausage").is_customer_wide

    def test_merged_over_prefers_own_fields(self):
        base = RuleFactory.create(
            pack_type=PackType.TUB,
            rounding_policy=RoundingPolicy.UP,
            tray_weight_kg=Decimal("0.4"),
        )
        top = RuleFactory.create(
            product_id="beef-sausage",
            rounding_policy=RoundingPolicy.DOWN,
            round_to_multiple=20,
        )

        merged = top.merged_over(base)

        assert merged.product_id == "beef-sausage"
        assert merged.pack_type == PackType.TUB
        assert merged.rounding_policy == RoundingPolicy.DOWN
        assert merged.round_to_multiple == 20
        assert merged.tray_weight_kg == Decimal("0.4")

    def test_merged_over_merges_tub_dicts(self):
        base = RuleFactory.create(
            tubs_per_box={TubSize.FIVE_KG: 3, TubSize.TWO_KG: 7},
            tub_weight_kg={TubSize.FIVE_KG: Decimal("5")},
        )
        top = RuleFactory.create(product_id="veal-sausage", tubs_per_box={TubSize.TWO_KG: 6})

        merged = top.merged_over(base)

        assert merged.tubs_per_box == {TubSize.FIVE_KG: 3, TubSize.TWO_KG: 6}
        assert merged.tub_weight_kg == {TubSize.FIVE_KG: Decimal("5")}

    def test_merged_over_keeps_inputs(self):
        base = RuleFactory.create(tubs_per_box={TubSize.FIVE_KG: 3})
        top = RuleFactory.create(product_id="veal-sausage", tubs_per_box={TubSize.TWO_KG: 6})

        top.merged_over(base)

        assert base.tubs_per_box == {TubSize.FIVE_KG: 3}
        assert top.tubs_per_box == {TubSize.TWO_KG: 6}

    def test_customer_id_required(self):
        with pytest.raises(ValidationError):
            CustomerPackagingRule(customer_id="")
