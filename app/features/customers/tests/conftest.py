"""Test fixtures for customers module."""

from datetime import UTC, datetime

import pytest

from app.features.data_platform.models import Customer


@pytest.fixture
def sample_customer_data() -> dict:
    """Sample customer payload."""
    return {
        "name": "Adaeze Okafor",
        "email": "adaeze@okafor.ng",
        "phone": "+234 803 555 0101",
        "address": "12 Allen Avenue, Ikeja",
    }


@pytest.fixture
def customer_row() -> Customer:
    """A persisted-looking customer row."""
    timestamp = datetime(2024, 10, 1, 9, 0, tzinfo=UTC)
    return Customer(
        id="c" * 32,
        name="Adaeze Okafor",
        email="adaeze@okafor.ng",
        phone="+234 803 555 0101",
        address="12 Allen Avenue, Ikeja",
        status="active",
        total_purchases=0,
        created_at=timestamp,
        updated_at=timestamp,
    )
