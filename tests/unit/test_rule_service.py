"""
Unit tests for customer rule selection.
"""

from decimal import Decimal

from services.rule_service import find_rule
from models.customer import OrderByUnit, PackagingRuleSet, PackType, RoundingPolicy
from models.product import TubSize
from tests.factories import RuleFactory


def _rule_set(*rules) -> PackagingRuleSet:
    return PackagingRuleSet(rules=tuple(rules))


class TestFindRule:
    """Exact (customer, product) lookup with customer-wide fallback."""

    def test_no_customer(self):
        rules = _rule_set(RuleFactory.create())

        assert find_rule(None, "chicken-sausage", rules) is None
        assert find_rule("", "chicken-sausage", rules) is None

    def test_no_rule_set(self):
        assert find_rule("customer-1", "chicken-sausage", None) is None

    def test_unknown_customer(self):
        rules = _rule_set(RuleFactory.create(customer_id="haji-baba"))

        assert find_rule("saffron", "chicken-sausage", rules) is None

    def test_customer_wide_rule_applies_to_any_product(self):
        wide = RuleFactory.create(customer_id="lmc", pack_type=PackType.TUB)
        rules = _rule_set(wide)

        assert find_rule("lmc", "veal-sausage", rules) == wide
        assert find_rule("lmc", "beef-sausage", rules) == wide

    def test_product_rule_only(self):
        product_rule = RuleFactory.create(customer_id="lmc", product_id="beef-meatballs", skip_boxes=True)
        rules = _rule_set(product_rule)

        assert find_rule("lmc", "beef-meatballs", rules) == product_rule
        assert find_rule("lmc", "veal-sausage", rules) is None

    def test_matching_is_case_sensitive(self):
        rules = _rule_set(RuleFactory.create(customer_id="lmc"))

        assert find_rule("LMC", "veal-sausage", rules) is None

    def test_product_rule_layered_over_customer_wide(self):
        wide = RuleFactory.create(
            customer_id="lmc",
            pack_type=PackType.TUB,
            tub_size=TubSize.FIVE_KG,
            tubs_per_box={TubSize.FIVE_KG: 3, TubSize.TWO_KG: 7},
            rounding_policy=RoundingPolicy.UP,
        )
        product_rule = RuleFactory.create(
            customer_id="lmc",
            product_id="beef-meatballs",
            order_by_unit=OrderByUnit.PIECE_COUNT,
            tubs_per_box={TubSize.FIVE_KG: 4},
        )
        rules = _rule_set(wide, product_rule)

        rule = find_rule("lmc", "beef-meatballs", rules)

        assert rule.product_id == "beef-meatballs"
        assert rule.order_by_unit == OrderByUnit.PIECE_COUNT
        assert rule.pack_type == PackType.TUB
        assert rule.rounding_policy == RoundingPolicy.UP
        assert rule.tubs_per_box == {TubSize.FIVE_KG: 4, TubSize.TWO_KG: 7}

    def test_rule_order_does_not_matter(self):
        wide = RuleFactory.create(customer_id="lmc", tray_weight_kg=Decimal("0.5"))
        product_rule = RuleFactory.create(customer_id="lmc", product_id="veal-sausage", trays_per_box=15)

        first = find_rule("lmc", "veal-sausage", _rule_set(wide, product_rule))
        second = find_rule("lmc", "veal-sausage", _rule_set(product_rule, wide))

        assert first == second
        assert first.tray_weight_kg == Decimal("0.5")
        assert first.trays_per_box == 15

    def test_other_customers_rules_ignored(self):
        mine = RuleFactory.create(customer_id="saffron", skip_boxes=True)
        theirs = RuleFactory.create(customer_id="haji-baba", product_id="beef-sausage", skip_boxes=False)

        rule = find_rule("saffron", "beef-sausage", _rule_set(mine, theirs))

        assert rule == mine


class TestSeedRules:
    """Rules shipped with the built-in catalog."""

    def test_haji_baba_rounds_down(self, seed_snapshot):
        rule = find_rule("haji-baba", "chicken-sausage", seed_snapshot.rule_set)

        assert rule.rounding_policy == RoundingPolicy.DOWN
        assert rule.round_to_multiple == 20

    def test_lmc_meatballs_by_count(self, seed_snapshot):
        rule = find_rule("lmc", "beef-meatballs", seed_snapshot.rule_set)

        assert rule.order_by_unit == OrderByUnit.PIECE_COUNT
        assert rule.pack_type == PackType.TUB

    def test_saffron_skips_boxes(self, seed_snapshot):
        rule = find_rule("saffron", "beef-burger", seed_snapshot.rule_set)

        assert rule.skip_boxes is True
        assert rule.order_by_unit == OrderByUnit.TRAY_COUNT
