"""
Packing engine services.

Pure functions for the calculation chain plus PackingService for
order-level orchestration.
"""

from services.rule_service import find_rule
from services.packaging_config_service import resolve_config
from services.packing_calculator_service import (
    calculate_line,
    select_path,
    boxes_with_four_tub_remainder,
)
from services.order_totals_service import aggregate
from services.packing_service import PackingService, get_packing_service

__all__ = [
    "find_rule",
    "resolve_config",
    "calculate_line",
    "select_path",
    "boxes_with_four_tub_remainder",
    "aggregate",
    "PackingService",
    "get_packing_service",
]
