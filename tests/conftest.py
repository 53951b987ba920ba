"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from decimal import Decimal

from config.catalog import get_seed_snapshot
from models.catalog import CatalogSnapshot
from models.product import ProductDefinition, TubPackaging, TubSize
from tests.factories import ProductFactory


# ===================
# PRODUCTS
# ===================

@pytest.fixture
def sausage() -> ProductDefinition:
    """Sausage: 0.4kg trays 20/box, 5kg tubs 3/box, 2kg tubs 7/box."""
    return ProductFactory.create(
        id="chicken-sausage",
        name="Chicken Sausage",
        meat_type="chicken",
        tub_packaging={
            TubSize.FIVE_KG: TubPackaging(weight_kg=Decimal("5"), tubs_per_box=3),
            TubSize.TWO_KG: TubPackaging(weight_kg=Decimal("2"), tubs_per_box=7),
        },
    )


@pytest.fixture
def burger() -> ProductDefinition:
    """Burger: 1kg trays, 10 per box."""
    return ProductFactory.create_burger(id="beef-burger", name="Beef Burger")


@pytest.fixture
def meatball() -> ProductDefinition:
    """Meatballs: 20 per tub, 5kg tubs 3 per box."""
    return ProductFactory.create_meatball(id="beef-meatballs", name="Beef Meatballs")


# ===================
# CATALOG
# ===================

@pytest.fixture
def seed_snapshot() -> CatalogSnapshot:
    """Built-in catalog with the four named customers."""
    return get_seed_snapshot()


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/calculate/defaults")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
