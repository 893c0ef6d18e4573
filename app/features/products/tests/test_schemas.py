"""Tests for product schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.features.products.schemas import ProductCreate, ProductResponse, ProductUpdate


class TestProductCreate:
    """Tests for ProductCreate validation."""

    def test_valid(self, sample_product_data: dict) -> None:
        """Test a valid payload with defaults applied."""
        product = ProductCreate(**sample_product_data)

        assert product.price == Decimal("4500.00")
        assert product.status == "active"

    def test_status_is_plain_string(self, sample_product_data: dict) -> None:
        """Test enum values are stored as plain strings for the ORM."""
        product = ProductCreate(**sample_product_data, status="out_of_stock")
        assert product.model_dump()["status"] == "out_of_stock"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("price", "-1"),
            ("price", "1.999"),
            ("stock", -3),
            ("name", ""),
            ("status", "discontinued"),
        ],
    )
    def test_invalid_fields(self, sample_product_data: dict, field: str, value: object) -> None:
        """Test invalid values are rejected."""
        with pytest.raises(ValidationError):
            ProductCreate(**{**sample_product_data, field: value})

    def test_name_is_stripped(self, sample_product_data: dict) -> None:
        """Test surrounding whitespace is removed."""
        product = ProductCreate(**{**sample_product_data, "name": "  Palm Oil  "})
        assert product.name == "Palm Oil"


class TestProductUpdate:
    """Tests for ProductUpdate."""

    def test_only_sent_fields_are_set(self) -> None:
        """Test exclude_unset yields just the changed fields."""
        update = ProductUpdate(stock=0, status="out_of_stock")
        assert update.model_dump(exclude_unset=True) == {"stock": 0, "status": "out_of_stock"}


def test_response_from_row(product_row) -> None:
    """Test the response is built from an ORM row."""
    response = ProductResponse.model_validate(product_row)

    assert response.id == "a" * 32
    assert response.status.value == "active"
    assert response.model_dump(mode="json")["price"] == "4500.00"
