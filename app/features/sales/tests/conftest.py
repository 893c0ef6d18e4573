"""Test fixtures for sales module."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from app.features.data_platform.models import Customer, Product, Sale, SaleItem

TIMESTAMP = datetime(2024, 10, 18, 12, 0, tzinfo=UTC)


@pytest.fixture
def rice() -> Product:
    """Rice at 4500 per bag."""
    return Product(
        id="p" * 32,
        name="Rice (5kg)",
        price=Decimal("4500.00"),
        stock=10,
        status="active",
        created_at=TIMESTAMP,
        updated_at=TIMESTAMP,
    )


@pytest.fixture
def oil() -> Product:
    """Palm oil at 1250 per bottle."""
    return Product(
        id="o" * 32,
        name="Palm Oil (1L)",
        price=Decimal("1250.00"),
        stock=25,
        status="active",
        created_at=TIMESTAMP,
        updated_at=TIMESTAMP,
    )


@pytest.fixture
def customer() -> Customer:
    """A customer with contact details."""
    return Customer(
        id="c" * 32,
        name="Tunde Bakare",
        email="tunde@bakare.ng",
        phone="0803 000 1111",
        status="active",
        total_purchases=0,
        created_at=TIMESTAMP,
        updated_at=TIMESTAMP,
    )


@pytest.fixture
def sale_row(rice: Product, customer: Customer) -> Sale:
    """A loaded sale: two bags of rice plus a line whose product was deleted."""
    items = [
        SaleItem(
            id="i1" + "0" * 30,
            product_id=rice.id,
            product=rice,
            position=0,
            quantity=2,
            price=Decimal("4500.00"),
            total=Decimal("9000.00"),
            created_at=TIMESTAMP,
            updated_at=TIMESTAMP,
        ),
        SaleItem(
            id="i2" + "0" * 30,
            product_id=None,
            product=None,
            position=1,
            quantity=1,
            price=Decimal("500.00"),
            total=Decimal("500.00"),
            created_at=TIMESTAMP,
            updated_at=TIMESTAMP,
        ),
    ]
    return Sale(
        id="s" * 32,
        date=TIMESTAMP,
        total=Decimal("9500.00"),
        tax=Decimal("712.50"),
        status="completed",
        payment_method="transfer",
        customer_id=customer.id,
        customer=customer,
        notes="Delivered",
        items=items,
        created_at=TIMESTAMP,
        updated_at=TIMESTAMP,
    )
