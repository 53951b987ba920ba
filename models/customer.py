"""
Customer and customer packaging rule schemas.

A CustomerPackagingRule overrides packaging defaults for one customer,
either for a single product or (product_id=None) for every product the
customer orders. Every field is optional: None means "not set here".
"""

from pydantic import Field
from typing import Optional
from enum import Enum
from decimal import Decimal

from models.base import FrozenSchema
from models.product import TubSize


class PackType(str, Enum):
    """Container a line is packed into."""
    TRAY = "tray"
    TUB = "tub"


class OrderByUnit(str, Enum):
    """Unit the customer states the ordered quantity in."""
    WEIGHT = "weight"
    TRAY_COUNT = "tray_count"
    PIECE_COUNT = "piece_count"


class RoundingPolicy(str, Enum):
    """How a weight-derived tray count becomes a packable number."""
    UP = "up"        # ceil, never under-deliver
    DOWN = "down"    # ceil, then floor to round_to_multiple
    NONE = "none"    # exact division, fractional trays allowed


class BoxPacking(str, Enum):
    """How tubs are grouped into boxes."""
    STANDARD = "standard"
    # Retired variant: when 1 or 2 tubs remain after filling boxes of 3,
    # they ride in boxes of 4 instead of opening a new box.
    PACK_FOUR_REMAINDER = "pack_four_remainder"


class CustomerPackagingRule(FrozenSchema):
    """Customer-specific packaging overrides."""

    customer_id: str = Field(..., min_length=1, description="Customer identifier")
    product_id: Optional[str] = Field(
        None,
        description="Product identifier, None for a customer-wide rule"
    )

    # Ordering convention
    pack_type: Optional[PackType] = None
    order_by_unit: Optional[OrderByUnit] = None
    tub_size: Optional[TubSize] = None

    # Rounding
    rounding_policy: Optional[RoundingPolicy] = None
    round_to_multiple: Optional[int] = Field(
        None,
        description="Tray multiple, only effective with rounding_policy=down"
    )

    # Boxes
    skip_boxes: Optional[bool] = None
    box_packing: Optional[BoxPacking] = None
    trays_per_box: Optional[int] = None
    tubs_per_box: dict[TubSize, int] = Field(default_factory=dict)

    # Unit weights
    tray_weight_kg: Optional[Decimal] = None
    tub_weight_kg: dict[TubSize, Decimal] = Field(default_factory=dict)
    patty_weight_kg: Optional[Decimal] = None
    patties_per_tray: Optional[int] = None

    @property
    def is_customer_wide(self) -> bool:
        return self.product_id is None

    def merged_over(self, base: "CustomerPackagingRule") -> "CustomerPackagingRule":
        """
        Layer this rule on top of another rule for the same customer.

        Fields set here win; unset fields come from base. Per-size
        dicts are merged key by key.

        Args:
            base: Usually the customer-wide rule

        Returns:
            New rule carrying this rule's identity
        """
        merged = {}
        for name in CustomerPackagingRule.model_fields:
            own = getattr(self, name)
            inherited = getattr(base, name)
            if isinstance(own, dict):
                merged[name] = {**inherited, **own}
            else:
                merged[name] = own if own is not None else inherited
        merged["customer_id"] = self.customer_id
        merged["product_id"] = self.product_id
        return CustomerPackagingRule(**merged)


class PackagingRuleSet(FrozenSchema):
    """Read-only snapshot of customer packaging rules."""

    rules: tuple[CustomerPackagingRule, ...] = ()


class CustomerProductLink(FrozenSchema):
    """A product a customer orders regularly."""

    product_id: str
    is_regular: bool = True


class Customer(FrozenSchema):
    """Customer record, used by callers to resolve ids and list products."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    special_instructions: Optional[str] = None
    products: tuple[CustomerProductLink, ...] = ()
    is_active: bool = True
