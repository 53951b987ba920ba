"""
Packaging config builder.

Merges line overrides, the customer rule, product defaults and system
defaults into one EffectivePackagingConfig. For every field the first
source that sets it wins:

    line override > customer rule > product > system default

Required numeric fields that no source provides, or that resolve to a
non-positive value, raise ConfigurationError. Nothing falls back to zero.
Unit weights and box fill must also sit inside VALIDATION_LIMITS.
"""

from decimal import Decimal
from typing import Any, Optional
import structlog

from config.packaging import (
    DEFAULT_TRAY_WEIGHT_KG,
    DEFAULT_TRAYS_PER_BOX,
    DEFAULT_PATTY_WEIGHT_KG,
    DEFAULT_PATTIES_PER_TRAY,
    DEFAULT_BURGER_TRAYS_PER_BOX,
    DEFAULT_PACK_TYPE,
    DEFAULT_ORDER_BY_UNIT,
    DEFAULT_TUB_SIZE,
    DEFAULT_ROUNDING_POLICY,
    DEFAULT_ROUND_TO_MULTIPLE,
    DEFAULT_SKIP_BOXES,
    DEFAULT_BOX_PACKING,
    TUB_WEIGHT_KG,
    TUBS_PER_BOX,
    VALIDATION_LIMITS,
)
from models.product import ProductCategory, ProductDefinition, TubSize
from models.customer import (
    BoxPacking,
    CustomerPackagingRule,
    OrderByUnit,
    PackType,
    RoundingPolicy,
)
from models.packing import EffectivePackagingConfig, LineOverrides
from exceptions import ConfigurationError, UnitMismatchError

logger = structlog.get_logger(__name__)

WEIGHT_LIMITS = VALIDATION_LIMITS["unit_weight_kg"]
BOX_LIMITS = VALIDATION_LIMITS["units_per_box"]


# ===================
# HELPERS
# ===================

def _first(*candidates: Any) -> Any:
    """First candidate that is not None."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def _require_positive(
    value: Any,
    field: str,
    product_id: str,
    limits: Optional[tuple[Any, Any]] = None
) -> Any:
    """Reject a missing, non-positive or out-of-range numeric value."""
    if value is None:
        raise ConfigurationError(field, product_id)
    if value <= 0:
        raise ConfigurationError(field, product_id, reason="must be positive", value=value)
    if limits is not None:
        low, high = limits
        if not low <= value <= high:
            raise ConfigurationError(
                field, product_id,
                reason=f"must be between {low} and {high}", value=value
            )
    return value


def _within(value: Any, limits: tuple[Any, Any]) -> bool:
    return value is not None and limits[0] <= value <= limits[1]


def _patty_tray_weight(
    patty_weight: Optional[Decimal],
    patties_per_tray: Optional[int],
    product_id: str
) -> Optional[Decimal]:
    """
    Tray weight from burger patties.

    Returns None when neither half is set. A missing half takes the
    system burger default.
    """
    if patty_weight is None and patties_per_tray is None:
        return None
    weight = _require_positive(
        _first(patty_weight, DEFAULT_PATTY_WEIGHT_KG), "patty_weight_kg", product_id, WEIGHT_LIMITS
    )
    count = _require_positive(
        _first(patties_per_tray, DEFAULT_PATTIES_PER_TRAY), "patties_per_tray", product_id
    )
    return weight * count


def _resolve_tray_weight(
    product: ProductDefinition,
    rule: Optional[CustomerPackagingRule],
    overrides: LineOverrides
) -> tuple[Decimal, bool]:
    """
    Resolve tray weight.

    Returns:
        (weight, explicit) where explicit is False when only the system
        default was available
    """
    candidates: list[Optional[Decimal]] = [
        overrides.tray_weight_kg,
        rule.tray_weight_kg if rule else None,
    ]
    if product.category == ProductCategory.BURGER:
        if rule:
            candidates.append(_patty_tray_weight(
                rule.patty_weight_kg,
                rule.patties_per_tray,
                product.id,
            ))
        candidates.append(product.tray_weight_kg)
        candidates.append(_patty_tray_weight(
            product.patty_weight_kg,
            product.patties_per_tray,
            product.id,
        ))
    else:
        candidates.append(product.tray_weight_kg)

    explicit = _first(*candidates)
    if explicit is not None:
        return _require_positive(explicit, "tray_weight_kg", product.id, WEIGHT_LIMITS), True

    if product.category == ProductCategory.BURGER:
        return DEFAULT_PATTY_WEIGHT_KG * DEFAULT_PATTIES_PER_TRAY, False
    return DEFAULT_TRAY_WEIGHT_KG, False


def _lookup_tub(
    product: ProductDefinition,
    rule: Optional[CustomerPackagingRule],
    overrides: LineOverrides,
    size: TubSize
) -> tuple[Optional[Decimal], Optional[int]]:
    """Tub weight and tubs per box for one tub size, None where nothing sets them."""
    catalog_tub = product.tub(size)

    weight = _first(
        overrides.tub_weight_kg,
        rule.tub_weight_kg.get(size) if rule else None,
        catalog_tub.weight_kg,
        TUB_WEIGHT_KG.get(size.value),
    )
    per_box = _first(
        overrides.tubs_per_box,
        rule.tubs_per_box.get(size) if rule else None,
        catalog_tub.tubs_per_box,
        TUBS_PER_BOX.get(size.value),
    )
    return weight, per_box


def _resolve_tub(
    product: ProductDefinition,
    rule: Optional[CustomerPackagingRule],
    overrides: LineOverrides,
    size: TubSize
) -> tuple[Decimal, int]:
    """Resolve tub weight and tubs per box for one tub size, both required."""
    weight, per_box = _lookup_tub(product, rule, overrides, size)
    return (
        _require_positive(weight, f"tub_weight_kg[{size.value}]", product.id, WEIGHT_LIMITS),
        _require_positive(per_box, f"tubs_per_box[{size.value}]", product.id, BOX_LIMITS),
    )


# ===================
# CONFIG BUILDER
# ===================

def resolve_config(
    product: ProductDefinition,
    rule: Optional[CustomerPackagingRule] = None,
    overrides: Optional[LineOverrides] = None
) -> EffectivePackagingConfig:
    """
    Build the effective packaging config for one line.

    Args:
        product: Catalog entry
        rule: Customer rule for this product (see find_rule), or None
        overrides: Per-line selections, or None

    Returns:
        EffectivePackagingConfig

    Raises:
        ConfigurationError: A required parameter is missing, not positive
            or outside VALIDATION_LIMITS
        UnitMismatchError: The order-by unit cannot be used for this product
    """
    overrides = overrides or LineOverrides()

    pack_type = PackType(_first(
        overrides.pack_type,
        rule.pack_type if rule else None,
        DEFAULT_PACK_TYPE,
    ))
    order_by_unit = OrderByUnit(_first(
        overrides.order_by_unit,
        rule.order_by_unit if rule else None,
        DEFAULT_ORDER_BY_UNIT,
    ))
    tub_size = TubSize(_first(
        overrides.tub_size,
        rule.tub_size if rule else None,
        DEFAULT_TUB_SIZE,
    ))
    rounding_policy = RoundingPolicy(_first(
        overrides.rounding_policy,
        rule.rounding_policy if rule else None,
        DEFAULT_ROUNDING_POLICY,
    ))
    # The multiple only applies when rounding down
    round_to_multiple = DEFAULT_ROUND_TO_MULTIPLE
    if rounding_policy == RoundingPolicy.DOWN:
        round_to_multiple = _first(
            overrides.round_to_multiple,
            rule.round_to_multiple if rule else None,
            DEFAULT_ROUND_TO_MULTIPLE,
        )
        if round_to_multiple < 1:
            raise ConfigurationError(
                "round_to_multiple", product.id,
                reason="must be at least 1", value=round_to_multiple
            )
    skip_boxes = bool(_first(
        overrides.skip_boxes,
        rule.skip_boxes if rule else None,
        DEFAULT_SKIP_BOXES,
    ))
    box_packing = BoxPacking(_first(
        rule.box_packing if rule else None,
        DEFAULT_BOX_PACKING,
    ))

    # Trays are always resolvable: tray_count ordering is open to every product
    tray_weight_kg, explicit_tray = _resolve_tray_weight(product, rule, overrides)
    default_trays_per_box = (
        DEFAULT_BURGER_TRAYS_PER_BOX
        if product.category == ProductCategory.BURGER
        else DEFAULT_TRAYS_PER_BOX
    )
    trays_per_box = _require_positive(
        _first(
            overrides.trays_per_box,
            rule.trays_per_box if rule else None,
            product.trays_per_box,
            default_trays_per_box,
        ),
        "trays_per_box",
        product.id,
        BOX_LIMITS,
    )

    is_meatball = product.category == ProductCategory.MEATBALL

    # Tub fields are required only when the line can reach a tub path
    tub_weight_kg = None
    tubs_per_box = None
    if is_meatball or (pack_type == PackType.TUB and order_by_unit == OrderByUnit.WEIGHT):
        tub_weight_kg, tubs_per_box = _resolve_tub(product, rule, overrides, tub_size)
    elif pack_type == PackType.TUB:
        weight, per_box = _lookup_tub(product, rule, overrides, tub_size)
        if _within(weight, WEIGHT_LIMITS) and _within(per_box, BOX_LIMITS):
            tub_weight_kg, tubs_per_box = weight, per_box

    count_per_tub = None
    if is_meatball:
        count_per_tub = _require_positive(
            _first(overrides.count_per_tub, product.count_per_tub),
            "count_per_tub",
            product.id,
        )

    supported = []
    # By weight, a tub line needs a usable tub
    if pack_type != PackType.TUB or tub_weight_kg is not None:
        supported.append(OrderByUnit.WEIGHT)
    supported.append(OrderByUnit.TRAY_COUNT)
    # A piece is a catalog-defined packet: meatballs by count, or one tray
    # for products whose tray weight is set somewhere other than the defaults
    if is_meatball or explicit_tray:
        supported.append(OrderByUnit.PIECE_COUNT)

    if order_by_unit not in supported:
        raise UnitMismatchError(
            order_by_unit.value,
            product.id,
            product.category.value,
            supported=[unit.value for unit in supported],
        )

    config = EffectivePackagingConfig(
        product_id=product.id,
        product_name=product.name,
        category=product.category,
        pack_type=pack_type,
        order_by_unit=order_by_unit,
        tub_size=tub_size,
        tray_weight_kg=tray_weight_kg,
        trays_per_box=trays_per_box,
        tub_weight_kg=tub_weight_kg,
        tubs_per_box=tubs_per_box,
        count_per_tub=count_per_tub,
        rounding_policy=rounding_policy,
        round_to_multiple=round_to_multiple,
        skip_boxes=skip_boxes,
        box_packing=box_packing,
        supported_units=tuple(supported),
    )

    logger.debug(
        "packing_config_resolved",
        product_id=product.id,
        customer_id=rule.customer_id if rule else None,
        pack_type=pack_type.value,
        order_by_unit=order_by_unit.value,
        rounding_policy=rounding_policy.value,
        skip_boxes=skip_boxes,
    )
    return config
