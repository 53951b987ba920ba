"""
Calculate API schemas.

Request bodies for the stateless /api/calculate endpoints and the
order-level calculation returned by PackingService.
"""

from pydantic import Field
from typing import Optional
from decimal import Decimal

from models.base import BaseSchema, FrozenSchema
from models.product import ProductDefinition
from models.customer import CustomerPackagingRule, OrderByUnit
from models.packing import LineOverrides, LineCalculationResult, OrderTotals


class LineCalculationRequest(BaseSchema):
    """
    Calculate one line from an inline product and rule.

    Nothing is looked up: the caller supplies every input.
    """

    product: ProductDefinition = Field(..., description="Catalog entry for the line")
    rule: Optional[CustomerPackagingRule] = Field(
        None,
        description="Customer rule for this product, if any"
    )
    overrides: Optional[LineOverrides] = Field(
        None,
        description="Per-line selections"
    )
    quantity: Decimal = Field(
        ...,
        ge=0,
        description="Ordered quantity in the order-by unit",
        examples=[Decimal("8.3")]
    )
    order_by_unit: Optional[OrderByUnit] = Field(
        None,
        description="Defaults to the resolved order-by unit"
    )


class OrderLineInput(BaseSchema):
    """One line of an order preview."""

    product_id: str = Field(..., min_length=1, description="Product identifier")
    quantity: Decimal = Field(..., ge=0, description="Ordered quantity")
    overrides: Optional[LineOverrides] = None


class OrderPreviewRequest(BaseSchema):
    """Preview packing for a customer's order against the built-in catalog."""

    customer: str = Field(
        ...,
        min_length=1,
        description="Customer id, or customer name as a fallback",
        examples=["haji-baba", "Haji Baba"]
    )
    items: list[OrderLineInput] = Field(..., min_length=1)


class OrderCalculation(FrozenSchema):
    """Lines and totals for one order."""

    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    lines: tuple[LineCalculationResult, ...] = ()
    totals: OrderTotals = OrderTotals()
