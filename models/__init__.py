"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.product import (
    ProductCategory,
    TubSize,
    TubPackaging,
    ProductDefinition,
)
from models.customer import (
    PackType,
    OrderByUnit,
    RoundingPolicy,
    BoxPacking,
    CustomerPackagingRule,
    PackagingRuleSet,
    CustomerProductLink,
    Customer,
)
from models.packing import (
    CalculationPath,
    LineOverrides,
    EffectivePackagingConfig,
    LineCalculationResult,
    OrderTotals,
)
from models.catalog import CatalogSnapshot
from models.calculate import (
    LineCalculationRequest,
    OrderLineInput,
    OrderPreviewRequest,
    OrderCalculation,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Product
    "ProductCategory",
    "TubSize",
    "TubPackaging",
    "ProductDefinition",

    # Customer
    "PackType",
    "OrderByUnit",
    "RoundingPolicy",
    "BoxPacking",
    "CustomerPackagingRule",
    "PackagingRuleSet",
    "CustomerProductLink",
    "Customer",

    # Packing
    "CalculationPath",
    "LineOverrides",
    "EffectivePackagingConfig",
    "LineCalculationResult",
    "OrderTotals",

    # Catalog
    "CatalogSnapshot",

    # Calculate API
    "LineCalculationRequest",
    "OrderLineInput",
    "OrderPreviewRequest",
    "OrderCalculation",
]
