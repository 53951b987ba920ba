"""
Packing engine schemas.

LineOverrides -> EffectivePackagingConfig -> LineCalculationResult -> OrderTotals
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from decimal import Decimal

from models.base import FrozenSchema
from models.product import ProductCategory, TubSize
from models.customer import PackType, OrderByUnit, RoundingPolicy, BoxPacking


class CalculationPath(str, Enum):
    """
    Calculation branch for a line.

    Chosen from (order-by unit, pack type, category) in this priority.
    """
    TRAY_COUNT = "tray_count"            # ordered by trays
    MEATBALL_PIECES = "meatball_pieces"  # meatballs ordered by piece count
    PIECES_AS_TRAYS = "pieces_as_trays"  # one piece == one tray
    TUB_WEIGHT = "tub_weight"            # tubs filled by weight
    TRAY_WEIGHT = "tray_weight"          # trays filled by weight (default)


class LineOverrides(FrozenSchema):
    """
    Per-line selections that beat every stored rule for one calculation.

    Typically UI toggles: pack type, tub size, order-by unit, no boxes.
    """

    pack_type: Optional[PackType] = None
    order_by_unit: Optional[OrderByUnit] = None
    tub_size: Optional[TubSize] = None
    skip_boxes: Optional[bool] = None
    rounding_policy: Optional[RoundingPolicy] = None
    round_to_multiple: Optional[int] = None
    tray_weight_kg: Optional[Decimal] = None
    trays_per_box: Optional[int] = None
    tub_weight_kg: Optional[Decimal] = None
    tubs_per_box: Optional[int] = None
    count_per_tub: Optional[int] = None


class EffectivePackagingConfig(FrozenSchema):
    """
    Calculation-ready packaging parameters for one line.

    Produced by resolve_config, never persisted. Tub fields are None when
    no tub path is reachable for the line.
    """

    product_id: str
    product_name: str
    category: ProductCategory

    pack_type: PackType
    order_by_unit: OrderByUnit
    tub_size: TubSize

    tray_weight_kg: Decimal
    trays_per_box: int
    tub_weight_kg: Optional[Decimal] = None
    tubs_per_box: Optional[int] = None
    count_per_tub: Optional[int] = None

    rounding_policy: RoundingPolicy
    round_to_multiple: int = 1
    skip_boxes: bool = False
    box_packing: BoxPacking = BoxPacking.STANDARD

    supported_units: tuple[OrderByUnit, ...] = Field(
        default=(OrderByUnit.WEIGHT, OrderByUnit.TRAY_COUNT),
        description="Order-by units this config can calculate"
    )


class LineCalculationResult(FrozenSchema):
    """Packing result for one order line."""

    product_id: str
    product_name: str
    pack_type: PackType
    order_by_unit: OrderByUnit
    path: Optional[CalculationPath] = Field(
        None,
        description="Branch taken, None for an unquantified line"
    )

    quantity: Decimal = Field(..., description="Ordered quantity in its native unit")
    weight_kg: Decimal = Decimal("0")
    trays: Decimal = Field(
        Decimal("0"),
        description="Whole trays, except under rounding_policy=none"
    )
    tubs: int = 0
    boxes: int = 0
    tub_size: Optional[TubSize] = None

    # Spare capacity in the last box
    remainder_trays: Decimal = Decimal("0")
    remainder_tubs: int = 0

    config_used: EffectivePackagingConfig


class OrderTotals(FrozenSchema):
    """Sum of line results for one order."""

    total_weight_kg: Decimal = Decimal("0")
    total_trays: Decimal = Decimal("0")
    total_tubs: int = 0
    total_boxes: int = 0
    item_count: int = 0
