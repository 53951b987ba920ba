"""
Packaging defaults and validation limits.

System-wide fallbacks used by the config builder when neither a line
override, a customer rule nor the product itself provides a value.
"""

from decimal import Decimal

# =============================================================================
# TRAY DEFAULTS (sausages)
# =============================================================================

# 1 tray = 0.4 kg (6 sausages)
DEFAULT_TRAY_WEIGHT_KG = Decimal("0.4")

# 1 box = 20 trays
DEFAULT_TRAYS_PER_BOX = 20


# =============================================================================
# TUB DEFAULTS
# =============================================================================
# 1kg and 2kg tubs are shallow, 5kg tubs are deep. Box fill differs by depth.

DEFAULT_TUB_SIZE = "5kg"

# Nominal tub weight per size
TUB_WEIGHT_KG = {
    "1kg": Decimal("1"),
    "2kg": Decimal("2"),
    "5kg": Decimal("5"),
}

# Tubs per box per size. No fallback for 1kg tubs: the product or the
# customer rule has to define it.
TUBS_PER_BOX = {
    "2kg": 7,
    "5kg": 3,
}


# =============================================================================
# BURGER DEFAULTS
# =============================================================================

# 1 patty = 100g
DEFAULT_PATTY_WEIGHT_KG = Decimal("0.1")

# 1 tray = 10 patties
DEFAULT_PATTIES_PER_TRAY = 10

# 1 box = 10 trays
DEFAULT_BURGER_TRAYS_PER_BOX = 10


# =============================================================================
# ORDERING DEFAULTS
# =============================================================================

DEFAULT_PACK_TYPE = "tray"
DEFAULT_ORDER_BY_UNIT = "weight"
DEFAULT_ROUNDING_POLICY = "up"
DEFAULT_ROUND_TO_MULTIPLE = 1
DEFAULT_SKIP_BOXES = False
DEFAULT_BOX_PACKING = "standard"


SYSTEM_DEFAULTS = {
    "sausage": {
        "tray": {
            "weight_kg": DEFAULT_TRAY_WEIGHT_KG,
            "trays_per_box": DEFAULT_TRAYS_PER_BOX,
        },
        "tub": {
            size: {
                "weight_kg": TUB_WEIGHT_KG[size],
                "tubs_per_box": TUBS_PER_BOX.get(size),
            }
            for size in TUB_WEIGHT_KG
        },
    },
    "burger": {
        "patty_weight_kg": DEFAULT_PATTY_WEIGHT_KG,
        "patties_per_tray": DEFAULT_PATTIES_PER_TRAY,
        "trays_per_box": DEFAULT_BURGER_TRAYS_PER_BOX,
    },
    "ordering": {
        "pack_type": DEFAULT_PACK_TYPE,
        "order_by_unit": DEFAULT_ORDER_BY_UNIT,
        "tub_size": DEFAULT_TUB_SIZE,
        "rounding_policy": DEFAULT_ROUNDING_POLICY,
        "round_to_multiple": DEFAULT_ROUND_TO_MULTIPLE,
        "skip_boxes": DEFAULT_SKIP_BOXES,
        "box_packing": DEFAULT_BOX_PACKING,
    },
}


# =============================================================================
# VALIDATION LIMITS
# =============================================================================
# Bounds on resolved packaging values, inclusive.

VALIDATION_LIMITS = {
    # 10g to 50kg for one tray, tub or patty
    "unit_weight_kg": (Decimal("0.01"), Decimal("50")),
    "units_per_box": (1, 100),
}
