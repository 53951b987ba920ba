"""
Product catalog schemas.

A ProductDefinition carries the packaging units of one product: tray
weight and fill, tub weight and fill per tub size, and for meatballs the
number of pieces that fill one tub.
"""

from pydantic import Field, model_validator
from typing import Optional
from enum import Enum
from decimal import Decimal

from models.base import FrozenSchema


class ProductCategory(str, Enum):
    """Product categories."""
    SAUSAGE = "sausage"
    BURGER = "burger"
    MEATBALL = "meatball"


class TubSize(str, Enum):
    """Tub sizes. 1kg and 2kg are shallow tubs, 5kg is a deep tub."""
    ONE_KG = "1kg"
    TWO_KG = "2kg"
    FIVE_KG = "5kg"


class TubPackaging(FrozenSchema):
    """Weight and box fill for one tub size."""

    weight_kg: Optional[Decimal] = Field(
        None,
        gt=0,
        description="Weight of one full tub (kg)"
    )
    tubs_per_box: Optional[int] = Field(
        None,
        gt=0,
        description="Tubs that fill one box"
    )


class ProductDefinition(FrozenSchema):
    """
    Catalog entry for one product.

    Packaging attributes are optional here; missing values fall through
    to customer rules or system defaults when the config is resolved.
    When present they must be strictly positive.
    """

    id: str = Field(..., min_length=1, description="Product identifier")
    name: str = Field(..., min_length=1, description="Display name")
    category: ProductCategory = Field(..., description="Product category")

    # Informational, used for reporting only
    meat_type: Optional[str] = Field(None, description="e.g. chicken, beef, lamb")
    spice_type: Optional[str] = Field(None, description="e.g. mild, normal")

    # Tray packaging
    tray_weight_kg: Optional[Decimal] = Field(None, gt=0, description="Weight of one tray (kg)")
    trays_per_box: Optional[int] = Field(None, gt=0, description="Trays that fill one box")

    # Tub packaging, keyed by tub size
    tub_packaging: dict[TubSize, TubPackaging] = Field(
        default_factory=dict,
        description="Tub weight and box fill per tub size"
    )

    # Meatballs only
    count_per_tub: Optional[int] = Field(None, gt=0, description="Pieces that fill one tub")

    # Burgers only
    patty_weight_kg: Optional[Decimal] = Field(None, gt=0, description="Weight of one patty (kg)")
    patties_per_tray: Optional[int] = Field(None, gt=0, description="Patties on one tray")

    is_active: bool = Field(True, description="Whether product is orderable")

    @model_validator(mode="after")
    def check_category_fields(self) -> "ProductDefinition":
        """count_per_tub is present iff the product is a meatball."""
        is_meatball = self.category == ProductCategory.MEATBALL
        if is_meatball and self.count_per_tub is None:
            raise ValueError("meatball products require count_per_tub")
        if not is_meatball and self.count_per_tub is not None:
            raise ValueError("count_per_tub is only valid for meatball products")
        return self

    def tub(self, size: TubSize) -> TubPackaging:
        """Tub packaging for a size, empty when the catalog has none."""
        return self.tub_packaging.get(size, TubPackaging())
