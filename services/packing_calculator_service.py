"""
Packing calculator - Core business logic.

Turns an ordered quantity into trays, tubs and boxes for one line,
given an EffectivePackagingConfig from resolve_config.

Branch priority (first match wins):
    1. ordered by tray count            -> TRAY_COUNT
    2. piece count, meatball            -> MEATBALL_PIECES
    3. piece count, anything else       -> PIECES_AS_TRAYS (1 piece = 1 tray)
    4. by weight, packed in tubs        -> TUB_WEIGHT
    5. by weight, packed in trays       -> TRAY_WEIGHT (rounding policy applies)

All arithmetic is Decimal so the same order always recalculates to the
same numbers.
"""

import math
from decimal import Decimal
from typing import Callable, NamedTuple, Optional, Union
import structlog

from models.product import ProductCategory
from models.customer import BoxPacking, OrderByUnit, PackType, RoundingPolicy
from models.packing import CalculationPath, EffectivePackagingConfig, LineCalculationResult
from exceptions import UnitMismatchError

logger = structlog.get_logger(__name__)

Quantity = Union[Decimal, int, float, str]

ZERO = Decimal("0")


class _Packed(NamedTuple):
    """Units produced by one calculation branch, before boxing."""
    weight_kg: Decimal
    trays: Decimal
    tubs: int


# ===================
# ARITHMETIC HELPERS
# ===================

def _to_decimal(value: Quantity) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so 8.3 stays 8.3 instead of its binary expansion
    return Decimal(str(value))


def ceil_div(numerator: Decimal, denominator: Union[Decimal, int]) -> int:
    """Ceiling division on Decimals."""
    return math.ceil(Decimal(numerator) / Decimal(denominator))


def boxes_with_four_tub_remainder(tubs: int) -> tuple[int, int]:
    """
    Box count when leftover tubs ride in boxes of 4.

    Boxes hold 3 tubs. One leftover tub turns one box into a box of 4,
    two leftover tubs turn two boxes into boxes of 4. Too few tubs to
    absorb the leftovers falls back to plain ceil(tubs / 3).

    Returns:
        (boxes, capacity) where capacity is the total tub slots
    """
    remainder = tubs % 3
    if remainder == 0:
        boxes = tubs // 3
        return boxes, boxes * 3
    if remainder == 1 and tubs >= 4:
        boxes = (tubs - 4) // 3 + 1
        return boxes, boxes * 3 + 1
    if remainder == 2 and tubs >= 8:
        boxes = (tubs - 8) // 3 + 2
        return boxes, boxes * 3 + 2
    boxes = math.ceil(tubs / 3)
    return boxes, boxes * 3


# ===================
# PATH SELECTION
# ===================

def select_path(config: EffectivePackagingConfig, order_by_unit: OrderByUnit) -> CalculationPath:
    """Pick the calculation branch for a line."""
    if order_by_unit == OrderByUnit.TRAY_COUNT:
        return CalculationPath.TRAY_COUNT
    if order_by_unit == OrderByUnit.PIECE_COUNT:
        if config.category == ProductCategory.MEATBALL:
            return CalculationPath.MEATBALL_PIECES
        return CalculationPath.PIECES_AS_TRAYS
    if config.pack_type == PackType.TUB:
        return CalculationPath.TUB_WEIGHT
    return CalculationPath.TRAY_WEIGHT


# ===================
# BRANCHES
# ===================

def _pack_tray_count(config: EffectivePackagingConfig, quantity: Decimal) -> _Packed:
    trays = quantity
    return _Packed(weight_kg=trays * config.tray_weight_kg, trays=trays, tubs=0)


def _pack_meatball_pieces(config: EffectivePackagingConfig, quantity: Decimal) -> _Packed:
    tubs = ceil_div(quantity, config.count_per_tub)
    # Approximate: partial tubs count as full tubs
    return _Packed(weight_kg=tubs * config.tub_weight_kg, trays=ZERO, tubs=tubs)


def _pack_tub_weight(config: EffectivePackagingConfig, quantity: Decimal) -> _Packed:
    tubs = ceil_div(quantity, config.tub_weight_kg)
    return _Packed(weight_kg=quantity, trays=ZERO, tubs=tubs)


def _pack_tray_weight(config: EffectivePackagingConfig, quantity: Decimal) -> _Packed:
    tray_weight = config.tray_weight_kg

    if config.rounding_policy == RoundingPolicy.NONE:
        # Customer's own accounting already guarantees whole trays
        return _Packed(weight_kg=quantity, trays=quantity / tray_weight, tubs=0)

    trays = ceil_div(quantity, tray_weight)

    if config.rounding_policy == RoundingPolicy.DOWN:
        multiple = config.round_to_multiple
        trays = (trays // multiple) * multiple
        # Actual packed weight, may be below the ordered weight
        return _Packed(weight_kg=trays * tray_weight, trays=Decimal(trays), tubs=0)

    return _Packed(weight_kg=quantity, trays=Decimal(trays), tubs=0)


_BRANCHES: dict[CalculationPath, Callable[[EffectivePackagingConfig, Decimal], _Packed]] = {
    CalculationPath.TRAY_COUNT: _pack_tray_count,
    CalculationPath.MEATBALL_PIECES: _pack_meatball_pieces,
    CalculationPath.PIECES_AS_TRAYS: _pack_tray_count,
    CalculationPath.TUB_WEIGHT: _pack_tub_weight,
    CalculationPath.TRAY_WEIGHT: _pack_tray_weight,
}

_TUB_PATHS = frozenset({CalculationPath.MEATBALL_PIECES, CalculationPath.TUB_WEIGHT})


# ===================
# BOXING
# ===================

def _box_trays(config: EffectivePackagingConfig, trays: Decimal) -> tuple[int, Decimal]:
    """Boxes and spare tray slots for a tray line."""
    if config.skip_boxes or trays <= 0:
        return 0, ZERO
    boxes = ceil_div(trays, config.trays_per_box)
    return boxes, boxes * config.trays_per_box - trays


def _box_tubs(config: EffectivePackagingConfig, tubs: int) -> tuple[int, int]:
    """Boxes and spare tub slots for a tub line."""
    if config.skip_boxes or tubs <= 0:
        return 0, 0
    if config.box_packing == BoxPacking.PACK_FOUR_REMAINDER and config.tubs_per_box == 3:
        boxes, capacity = boxes_with_four_tub_remainder(tubs)
        return boxes, capacity - tubs
    boxes = ceil_div(Decimal(tubs), config.tubs_per_box)
    return boxes, boxes * config.tubs_per_box - tubs


# ===================
# CALCULATOR
# ===================

def _empty_result(
    config: EffectivePackagingConfig,
    order_by_unit: OrderByUnit,
    quantity: Decimal
) -> LineCalculationResult:
    """Zero result for a line that has not been quantified yet. Keeps the input quantity."""
    return LineCalculationResult(
        product_id=config.product_id,
        product_name=config.product_name,
        pack_type=config.pack_type,
        order_by_unit=order_by_unit,
        path=None,
        quantity=quantity,
        config_used=config,
    )


def calculate_line(
    config: EffectivePackagingConfig,
    quantity: Quantity,
    order_by_unit: Optional[OrderByUnit] = None
) -> LineCalculationResult:
    """
    Calculate packing for one order line.

    Pure function: identical inputs always give identical results.

    Args:
        config: Resolved packaging config
        quantity: Ordered amount in the order-by unit (kg, trays or pieces)
        order_by_unit: Defaults to config.order_by_unit

    Returns:
        LineCalculationResult (all zeros except quantity when quantity <= 0)

    Raises:
        UnitMismatchError: order_by_unit is not supported by this config
    """
    unit = OrderByUnit(order_by_unit) if order_by_unit is not None else config.order_by_unit

    if unit not in config.supported_units:
        raise UnitMismatchError(
            unit.value,
            config.product_id,
            config.category.value,
            supported=[u.value for u in config.supported_units],
        )

    qty = _to_decimal(quantity)
    if qty <= 0:
        return _empty_result(config, unit, qty)

    path = select_path(config, unit)
    packed = _BRANCHES[path](config, qty)

    if path in _TUB_PATHS:
        boxes, remainder_tubs = _box_tubs(config, packed.tubs)
        remainder_trays = ZERO
        pack_type = PackType.TUB
        tub_size = config.tub_size
    else:
        boxes, remainder_trays = _box_trays(config, packed.trays)
        remainder_tubs = 0
        pack_type = PackType.TRAY
        tub_size = None

    result = LineCalculationResult(
        product_id=config.product_id,
        product_name=config.product_name,
        pack_type=pack_type,
        order_by_unit=unit,
        path=path,
        quantity=qty,
        weight_kg=packed.weight_kg,
        trays=packed.trays,
        tubs=packed.tubs,
        boxes=boxes,
        tub_size=tub_size,
        remainder_trays=remainder_trays,
        remainder_tubs=remainder_tubs,
        config_used=config,
    )

    logger.debug(
        "line_calculated",
        product_id=config.product_id,
        path=path.value,
        quantity=str(qty),
        trays=str(result.trays),
        tubs=result.tubs,
        boxes=result.boxes,
    )
    return result
