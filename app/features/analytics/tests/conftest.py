"""Test fixtures for analytics module."""

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from app.features.analytics.records import (
    CustomerRef,
    ProductRef,
    SaleItemRecord,
    SaleRecord,
)

LAGOS = ZoneInfo("Africa/Lagos")

SaleFactory = Callable[..., SaleRecord]


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant (Saturday 19 October 2024, 15:00 Lagos)."""
    return datetime(2024, 10, 19, 15, 0, tzinfo=LAGOS)


@pytest.fixture
def make_sale(now: datetime) -> SaleFactory:
    """Factory for sale records dated relative to ``now``."""
    counter = iter(range(1, 10_000))

    def _make(
        total: str | int = "100.00",
        days_ago: float | None = 1,
        payment_method: str | None = "cash",
        customer: tuple[str, str] | None = None,
        items: list[tuple[str | None, int, str]] | None = None,
        tax: str = "0",
        status: str = "completed",
    ) -> SaleRecord:
        return SaleRecord(
            id=f"sale-{next(counter)}",
            date=None if days_ago is None else now - timedelta(days=days_ago),
            total=Decimal(str(total)),
            tax=Decimal(tax),
            status=status,
            payment_method=payment_method,
            customer=CustomerRef(id=customer[0], name=customer[1]) if customer else None,
            items=tuple(
                SaleItemRecord(
                    product=ProductRef(id=None, name=name) if name else None,
                    quantity=quantity,
                    price=Decimal(line_total) / quantity,
                    total=Decimal(line_total),
                )
                for name, quantity, line_total in (items or [])
            ),
        )

    return _make


@pytest.fixture
def sample_sales(make_sale: SaleFactory) -> list[SaleRecord]:
    """A small mixed snapshot spanning ~45 days."""
    return [
        make_sale(
            total="1000.00",
            days_ago=1,
            payment_method="cash",
            customer=("c1", "Ada"),
            items=[("Rice", 2, "600.00"), ("Beans", 1, "400.00")],
        ),
        make_sale(
            total="2000.00",
            days_ago=3,
            payment_method="card",
            customer=("c2", "Bola"),
            items=[("Rice", 4, "1200.00"), ("Oil", 2, "800.00")],
        ),
        make_sale(
            total="3000.00",
            days_ago=5,
            payment_method="mobile_money",
            items=[("Oil", 6, "2400.00"), (None, 1, "600.00")],
        ),
        make_sale(
            total="500.00",
            days_ago=20,
            payment_method=None,
            customer=("c1", "Ada"),
            items=[("Beans", 1, "500.00")],
        ),
        make_sale(
            total="4000.00",
            days_ago=45,
            payment_method="transfer",
            customer=("c3", "Chidi"),
            items=[("Rice", 10, "4000.00")],
        ),
        make_sale(total="999.00", days_ago=None, payment_method="cash"),
    ]


@pytest.fixture
def sample_sale_mapping() -> dict:
    """A loosely-typed sale as exported by a document store."""
    return {
        "id": "abc123",
        "date": "2024-10-18T09:30:00Z",
        "total": 1500,
        "tax": "112.50",
        "status": "completed",
        "payment_method": "transfer",
        "customer": {"id": "cust-1", "name": "Ada"},
        "items": [
            {"product": {"id": "p1", "name": "Rice"}, "quantity": 3, "price": 300, "total": 900},
            {"product": {"id": "p2", "name": "Oil"}, "quantity": "2", "price": "300", "total": "600"},
        ],
        "notes": "  paid in full  ",
    }
