"""Pydantic schemas for the dashboard summary."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class RecentSale(BaseModel):
    """Compact row for the recent sales table."""

    id: str
    date: datetime
    total: Decimal
    customer_name: str | None = Field(None, description="Null for walk-in sales.")
    item_count: int


class DashboardSummary(BaseModel):
    """Headline numbers across all recorded sales."""

    total_revenue: Decimal = Field(..., description="Sum of pre-tax sale totals.")
    sales_count: int
    customers_count: int
    products_count: int
    average_sale: Decimal = Field(..., description="total_revenue / sales_count, 0 with no sales.")
    recent_sales: list[RecentSale] = Field(default_factory=list)
