"""Fixtures for data platform integration tests.

``db_session`` comes from the repository-level conftest and creates the
schema for each test.
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.data_platform.models import Customer, Product


@pytest.fixture
async def sample_product(db_session: AsyncSession) -> Product:
    """Create a sample product for testing."""
    product = Product(name="Garri (2kg)", category="Grains", price=Decimal("1500.00"), stock=8)
    db_session.add(product)
    await db_session.flush()
    return product


@pytest.fixture
async def sample_customer(db_session: AsyncSession) -> Customer:
    """Create a sample customer for testing."""
    customer = Customer(name="Ngozi Eze", email="ngozi@example.com")
    db_session.add(customer)
    await db_session.flush()
    return customer
