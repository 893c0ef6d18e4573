"""Pydantic schemas for product catalog endpoints."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.features.data_platform.models import ProductStatus


class ProductSortField(str, Enum):
    """Columns the product list can be sorted by."""

    NAME = "name"
    PRICE = "price"
    STOCK = "stock"
    CATEGORY = "category"
    CREATED_AT = "created_at"


class ProductCreate(BaseModel):
    """Payload for creating a product."""

    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200, description="Display name.")
    description: str | None = Field(None, description="Free-text description.")
    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Current list price. Sales capture their own unit price.",
    )
    stock: int = Field(0, ge=0, description="Units on hand.")
    category: str | None = Field(None, max_length=100, description="Product category.")
    status: ProductStatus = Field(ProductStatus.ACTIVE, description="active or out_of_stock.")


class ProductUpdate(BaseModel):
    """Partial update; only fields that are sent are changed."""

    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    stock: int | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    status: ProductStatus | None = None


class ProductResponse(BaseModel):
    """Product record."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Product identifier.")
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    category: str | None = None
    status: ProductStatus
    created_at: datetime
    updated_at: datetime


class CategoryListResponse(BaseModel):
    """Distinct product categories."""

    categories: list[str] = Field(..., description="Non-empty categories, sorted.")
