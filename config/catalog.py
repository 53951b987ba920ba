"""
Built-in product catalog and customer packaging rules.

Seed data for the preview endpoint and for local runs. Callers with
their own store build a CatalogSnapshot from it instead.

Customer notes:
    Haji Baba   - trays sealed, 20 per box, round DOWN to a multiple of 20
    LMC         - tubs (5kg deep, 7 x 2kg shallow per box), meatballs by count
    Halalnivore - 5kg tubs, 3 per box
    Saffron     - orders by tray count, no boxes
"""

from decimal import Decimal

from models.product import ProductCategory, ProductDefinition, TubPackaging, TubSize
from models.customer import (
    Customer,
    CustomerPackagingRule,
    CustomerProductLink,
    OrderByUnit,
    PackagingRuleSet,
    PackType,
    RoundingPolicy,
)
from models.catalog import CatalogSnapshot


def _standard_tubs() -> dict[TubSize, TubPackaging]:
    return {
        TubSize.FIVE_KG: TubPackaging(weight_kg=Decimal("5"), tubs_per_box=3),
        TubSize.TWO_KG: TubPackaging(weight_kg=Decimal("2"), tubs_per_box=7),
    }


def _sausage(product_id: str, name: str, meat_type: str) -> ProductDefinition:
    return ProductDefinition(
        id=product_id,
        name=name,
        category=ProductCategory.SAUSAGE,
        meat_type=meat_type,
        tray_weight_kg=Decimal("0.4"),
        trays_per_box=20,
        tub_packaging=_standard_tubs(),
    )


def _burger(product_id: str, name: str, meat_type: str, **extra) -> ProductDefinition:
    return ProductDefinition(
        id=product_id,
        name=name,
        category=ProductCategory.BURGER,
        meat_type=meat_type,
        tray_weight_kg=Decimal("1"),
        trays_per_box=10,
        tub_packaging=_standard_tubs(),
        **extra,
    )


def seed_products() -> tuple[ProductDefinition, ...]:
    """All products sold, in display order."""
    return (
        # Sausages
        _sausage("chicken-sausage", "Chicken Sausage", "chicken"),
        _sausage("chicken-sausage-50g", "Chicken Sausage (50g)", "chicken"),
        _sausage("chicken-sausage-30g", "Chicken Sausage (30g)", "chicken"),
        _sausage("chicken-sausage-60g", "Chicken Sausage (60g)", "chicken"),
        _sausage("beef-sausage", "Beef Sausage", "beef"),
        _sausage("lamb-sausage", "Lamb Sausage", "lamb"),
        _sausage("veal-sausage", "Veal Sausage", "veal"),
        # Burgers
        _burger(
            "beef-burger", "Beef Burger", "beef",
            patty_weight_kg=Decimal("0.1"),
            patties_per_tray=10,
        ),
        _burger("lamb-kofte", "Lamb Kofte", "lamb"),
        _burger("beef-cj", "Beef C&J", "beef"),
        # Meatballs
        ProductDefinition(
            id="beef-meatballs",
            name="Beef Meatballs",
            category=ProductCategory.MEATBALL,
            meat_type="beef",
            tray_weight_kg=Decimal("1"),
            trays_per_box=10,
            tub_packaging=_standard_tubs(),
            count_per_tub=20,
        ),
    )


def _links(*product_ids: str) -> tuple[CustomerProductLink, ...]:
    return tuple(CustomerProductLink(product_id=pid) for pid in product_ids)


def seed_customers() -> tuple[Customer, ...]:
    return (
        Customer(
            id="haji-baba",
            name="Haji Baba",
            special_instructions=(
                "Trays sealed and bulk of 20 trays in a box. "
                "Round DOWN to multiple of 20 trays."
            ),
            products=_links("chicken-sausage", "beef-sausage"),
        ),
        Customer(
            id="lmc",
            name="LMC",
            special_instructions="Veal sausage in 2kg or 5kg tubs. Meatballs by count.",
            products=_links(
                "chicken-sausage-50g",
                "chicken-sausage-30g",
                "beef-sausage",
                "lamb-sausage",
                "veal-sausage",
                "beef-meatballs",
            ),
        ),
        Customer(
            id="halalnivore",
            name="Halalnivore",
            products=_links("chicken-sausage-60g", "chicken-sausage-30g"),
        ),
        Customer(
            id="saffron",
            name="Saffron",
            special_instructions="Orders by tray count. No boxes.",
            products=_links(
                "chicken-sausage",
                "beef-sausage",
                "lamb-sausage",
                "beef-burger",
                "lamb-kofte",
                "beef-cj",
            ),
        ),
    )


def seed_rules() -> PackagingRuleSet:
    """Customer-wide rules plus per-product ordering conventions."""
    rules = [
        # Haji Baba
        CustomerPackagingRule(
            customer_id="haji-baba",
            pack_type=PackType.TRAY,
            order_by_unit=OrderByUnit.WEIGHT,
            trays_per_box=20,
            rounding_policy=RoundingPolicy.DOWN,
            round_to_multiple=20,
        ),
        # LMC
        CustomerPackagingRule(
            customer_id="lmc",
            pack_type=PackType.TUB,
            order_by_unit=OrderByUnit.WEIGHT,
            tub_size=TubSize.FIVE_KG,
            tubs_per_box={TubSize.FIVE_KG: 3, TubSize.TWO_KG: 7},
            rounding_policy=RoundingPolicy.UP,
        ),
        CustomerPackagingRule(
            customer_id="lmc",
            product_id="beef-meatballs",
            order_by_unit=OrderByUnit.PIECE_COUNT,
        ),
        # Halalnivore
        CustomerPackagingRule(
            customer_id="halalnivore",
            pack_type=PackType.TUB,
            order_by_unit=OrderByUnit.WEIGHT,
            tub_size=TubSize.FIVE_KG,
            tubs_per_box={TubSize.FIVE_KG: 3},
            rounding_policy=RoundingPolicy.UP,
        ),
        # Saffron
        CustomerPackagingRule(
            customer_id="saffron",
            pack_type=PackType.TRAY,
            order_by_unit=OrderByUnit.TRAY_COUNT,
            skip_boxes=True,
        ),
    ]
    return PackagingRuleSet(rules=tuple(rules))


def get_seed_snapshot() -> CatalogSnapshot:
    """
    Build the built-in catalog snapshot.

    A new snapshot on every call; nothing is cached at module level.
    """
    return CatalogSnapshot(
        products=seed_products(),
        customers=seed_customers(),
        rule_set=seed_rules(),
    )
