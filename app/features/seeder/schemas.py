"""Pydantic schemas for the seeder feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class SeederStatus(BaseModel):
    """Current database state with row counts and sale date range."""

    products: int = Field(description="Number of product records")
    customers: int = Field(description="Number of customer records")
    sales: int = Field(description="Number of sale records")
    sale_items: int = Field(description="Number of sale item records")
    first_sale_date: datetime | None = Field(default=None, description="Earliest sale date")
    last_sale_date: datetime | None = Field(default=None, description="Latest sale date")


class GenerateParams(BaseModel):
    """Parameters for generating demo data."""

    seed: int = Field(default=42, ge=0, description="Random seed for reproducibility")
    customers: int = Field(default=20, ge=0, le=1000, description="Customers to generate")
    products: int = Field(default=30, ge=0, le=500, description="Products to generate")
    sales: int = Field(default=200, ge=0, le=10000, description="Sales to generate")
    days: int = Field(
        default=90,
        ge=1,
        le=365,
        description="Sales are spread over this many days up to now",
    )


class GenerateResult(BaseModel):
    """Result of a generate operation."""

    records_created: dict[str, int] = Field(description="Rows inserted per table")
    seed: int = Field(description="Seed used")
    duration_seconds: float = Field(description="Time taken")
    message: str


class DeleteResult(BaseModel):
    """Result of a delete operation."""

    records_deleted: dict[str, int] = Field(description="Rows deleted per table")
    message: str
