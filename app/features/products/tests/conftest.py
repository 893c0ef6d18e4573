"""Test fixtures for products module."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from app.features.data_platform.models import Product


@pytest.fixture
def sample_product_data() -> dict:
    """Sample product payload."""
    return {
        "name": "Jollof Rice (5kg)",
        "description": "Long-grain parboiled rice",
        "price": "4500.00",
        "stock": 40,
        "category": "Grains",
    }


@pytest.fixture
def product_row() -> Product:
    """A persisted-looking product row."""
    timestamp = datetime(2024, 10, 1, 9, 0, tzinfo=UTC)
    return Product(
        id="a" * 32,
        name="Jollof Rice (5kg)",
        description="Long-grain parboiled rice",
        price=Decimal("4500.00"),
        stock=40,
        category="Grains",
        status="active",
        created_at=timestamp,
        updated_at=timestamp,
    )
