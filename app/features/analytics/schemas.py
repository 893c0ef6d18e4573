"""Pydantic schemas for analytics endpoints.

Responses mirror the aggregator's result dataclasses and are built from them
with ``model_validate`` (``from_attributes``). Monetary values are Decimals
and serialize as JSON strings.
"""

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.features.analytics.aggregator import TimeRange

# =============================================================================
# Building blocks
# =============================================================================


class DailyPointResponse(BaseModel):
    """Revenue and orders for one calendar day."""

    model_config = ConfigDict(from_attributes=True)

    date: date_type = Field(..., description="Calendar day in the business timezone.")
    label: str = Field(..., description='Short display label, e.g. "Oct 19".')
    revenue: Decimal = Field(..., ge=0, description="Sum of pre-tax sale totals that day.")
    orders: int = Field(..., ge=0, description="Number of sales that day.")


class ProductPerformanceResponse(BaseModel):
    """Units and revenue for one product."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., description="Product name (line items are grouped by name).")
    quantity: int = Field(..., description="Units sold.")
    revenue: Decimal = Field(..., description="Sum of captured line totals.")


class PaymentMethodShareResponse(BaseModel):
    """Revenue and count for one payment method."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(
        ...,
        description='Method label with its first letter capitalized; "Unknown" when unspecified.',
    )
    value: Decimal = Field(..., description="Sum of pre-tax sale totals.")
    count: int = Field(..., ge=0, description="Number of sales.")


class CustomerRankingResponse(BaseModel):
    """Purchases and spend for one customer."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Customer identifier.")
    name: str = Field(..., description="Customer name.")
    purchases: int = Field(..., ge=1, description="Number of sales attributed to the customer.")
    spent: Decimal = Field(..., description="Sum of pre-tax sale totals.")
    average_order: Decimal | None = Field(
        None,
        description="spent / purchases. Null when there are no purchases.",
    )


class MetricsResponse(BaseModel):
    """Headline metrics for a range."""

    model_config = ConfigDict(from_attributes=True)

    total_revenue: Decimal = Field(..., description="Sum of pre-tax totals in the range.")
    sales_count: int = Field(..., ge=0, description="Number of sales in the range.")
    average_sale: Decimal = Field(..., description="total_revenue / sales_count, 0 when empty.")
    growth_rate: Decimal = Field(
        ...,
        description="Percent change against the previous 30 days, rounded to 2 decimals. "
        "Only computed for the 30days range; 0 otherwise or when the previous period is empty.",
    )
    previous_period_revenue: Decimal = Field(
        ...,
        description="Revenue dated 60 to 30 days ago (30days range only, otherwise 0).",
    )


# =============================================================================
# Endpoint responses
# =============================================================================


class AnalyticsReportResponse(BaseModel):
    """Full analytics view for one range."""

    model_config = ConfigDict(from_attributes=True)

    range: TimeRange = Field(..., description="Effective range (unknown tokens become 30days).")
    generated_at: datetime = Field(..., description="Reference instant the report was computed at.")
    metrics: MetricsResponse
    trend: list[DailyPointResponse] = Field(
        ...,
        description="Trailing daily series ending today. Independent of the selected range.",
    )
    top_products: list[ProductPerformanceResponse]
    payment_methods: list[PaymentMethodShareResponse]
    top_customers: list[CustomerRankingResponse]


class TrendResponse(BaseModel):
    """Daily revenue series."""

    days: int = Field(..., ge=1, description="Number of days in the series.")
    points: list[DailyPointResponse]


class ProductRankingResponse(BaseModel):
    """Top products for a range (or across all sales)."""

    range: TimeRange | None = Field(
        None,
        description="Effective range; null for the all-time performance view.",
    )
    limit: int = Field(..., ge=1, description="Maximum number of products returned.")
    products: list[ProductPerformanceResponse]


class PaymentMethodsResponse(BaseModel):
    """Payment method distribution for a range."""

    range: TimeRange
    methods: list[PaymentMethodShareResponse]


class CustomerRankingListResponse(BaseModel):
    """Top customers for a range."""

    range: TimeRange
    limit: int = Field(..., ge=1)
    customers: list[CustomerRankingResponse]


class MetricsViewResponse(BaseModel):
    """Headline metrics for a range."""

    range: TimeRange
    metrics: MetricsResponse


# =============================================================================
# Requests
# =============================================================================


class ReportRequest(BaseModel):
    """Compute a report over caller-supplied sale records.

    Records are loosely typed: missing fields take defaults and unparseable
    dates exclude a sale from date-based views instead of failing.
    """

    range: str = Field("30days", description="Range token; unknown tokens mean 30days.")
    now: datetime | None = Field(
        None,
        description="Reference instant. Defaults to the current time in the business timezone. "
        "Naive values are taken as UTC.",
    )
    product_limit: int = Field(5, ge=1, le=100)
    customer_limit: int = Field(5, ge=1, le=100)
    sales: list[dict[str, Any]] = Field(
        default_factory=list,
        max_length=50000,
        description="Sale records with optional id, date, total, tax, status, "
        "payment_method, customer {id, name} and items "
        "[{product {id, name}, quantity, price, total}].",
    )
