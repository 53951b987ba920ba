"""
Order aggregator.

Folds line results into order totals. No branching of its own: every
line counts once toward item_count, including unquantified lines.
Callers that want to drop empty lines filter before aggregating.
"""

from functools import reduce
from typing import Iterable

from models.packing import LineCalculationResult, OrderTotals


def _add_line(totals: OrderTotals, line: LineCalculationResult) -> OrderTotals:
    return OrderTotals(
        total_weight_kg=totals.total_weight_kg + line.weight_kg,
        total_trays=totals.total_trays + line.trays,
        total_tubs=totals.total_tubs + line.tubs,
        total_boxes=totals.total_boxes + line.boxes,
        item_count=totals.item_count + 1,
    )


def aggregate(lines: Iterable[LineCalculationResult]) -> OrderTotals:
    """
    Sum line results into order totals.

    Args:
        lines: Line results (any iterable, empty allowed)

    Returns:
        OrderTotals, all zeros for no lines
    """
    return reduce(_add_line, lines, OrderTotals())
