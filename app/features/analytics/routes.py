"""API routes for analytics endpoints.

These endpoints compute the analytics view (metrics, daily trend, top
products, payment methods, top customers) over a snapshot of stored sales,
or over sale records supplied by the caller.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import get_logger
from app.features.analytics.schemas import (
    AnalyticsReportResponse,
    CustomerRankingListResponse,
    MetricsViewResponse,
    PaymentMethodsResponse,
    ProductRankingResponse,
    ReportRequest,
    TrendResponse,
)
from app.features.analytics.service import AnalyticsService

logger = get_logger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])

RANGE_DESCRIPTION = (
    "Time window: 7days, 30days, 90days, thisMonth or lastMonth. "
    "Unknown values fall back to 30days (echoed in the response)."
)


# =============================================================================
# Report
# =============================================================================


@router.get(
    "/report",
    response_model=AnalyticsReportResponse,
    summary="Compute the analytics report",
    description="""
Compute every analytics view for one time range.

**Contents**:
- `metrics`: total revenue, sales count, average sale, growth rate
- `trend`: revenue and orders per day for the trailing 30 days
- `top_products`: top 5 products by line-item revenue
- `payment_methods`: revenue and count per payment method
- `top_customers`: top 5 customers by amount spent

**Ranges**:
- `7days`, `30days`, `90days`: rolling windows ending now
- `thisMonth`: since the start of the current month
- `lastMonth`: the whole previous calendar month

**Notes**:
- Revenue excludes tax
- The trend always covers the trailing 30 days, whatever the range
- Growth rate is only computed for `30days` (against the 30 days before); 0 otherwise
""",
)
async def get_report(
    range_token: str | None = Query(None, alias="range", description=RANGE_DESCRIPTION),
    db: AsyncSession = Depends(get_db),
) -> AnalyticsReportResponse:
    """Compute the full analytics report.

    Args:
        range_token: Range token.
        db: Database session.

    Returns:
        Analytics report for the effective range.
    """
    service = AnalyticsService()
    return await service.get_report(db=db, range_token=range_token)


@router.post(
    "/report",
    response_model=AnalyticsReportResponse,
    summary="Compute a report from supplied sales",
    description="""
Compute the analytics report over sale records sent in the request body
instead of the stored sales.

Records are loosely typed: missing totals count as 0, missing items as none,
a missing payment method as "Unknown", and a missing or unparseable date
keeps the sale out of every date-based view.
""",
)
async def post_report(request: ReportRequest) -> AnalyticsReportResponse:
    """Compute a report from caller-supplied sale records.

    Args:
        request: Sale records, range and limits.

    Returns:
        Analytics report for the effective range.
    """
    service = AnalyticsService()
    return service.report_from_request(request)


# =============================================================================
# Individual views
# =============================================================================


@router.get(
    "/trend",
    response_model=TrendResponse,
    summary="Daily revenue trend",
    description="Revenue and order count per day for the trailing 30 days, oldest first. "
    "Days without sales are present with zero values.",
)
async def get_trend(db: AsyncSession = Depends(get_db)) -> TrendResponse:
    """Daily revenue trend."""
    service = AnalyticsService()
    return await service.get_trend(db=db)


@router.get(
    "/metrics",
    response_model=MetricsViewResponse,
    summary="Headline metrics",
)
async def get_metrics(
    range_token: str | None = Query(None, alias="range", description=RANGE_DESCRIPTION),
    db: AsyncSession = Depends(get_db),
) -> MetricsViewResponse:
    """Revenue, count, average sale and growth rate for a range."""
    service = AnalyticsService()
    return await service.get_metrics(db=db, range_token=range_token)


@router.get(
    "/products",
    response_model=ProductRankingResponse,
    summary="Top products in a range",
)
async def get_top_products(
    range_token: str | None = Query(None, alias="range", description=RANGE_DESCRIPTION),
    limit: int | None = Query(
        None,
        ge=1,
        le=100,
        description="Maximum number of products (default 5).",
    ),
    db: AsyncSession = Depends(get_db),
) -> ProductRankingResponse:
    """Products ranked by line-item revenue within a range."""
    service = AnalyticsService()
    return await service.get_top_products(db=db, range_token=range_token, limit=limit)


@router.get(
    "/products/performance",
    response_model=ProductRankingResponse,
    summary="Product performance across all sales",
)
async def get_product_performance(
    limit: int | None = Query(
        None,
        ge=1,
        le=100,
        description="Maximum number of products (default 10).",
    ),
    db: AsyncSession = Depends(get_db),
) -> ProductRankingResponse:
    """Products ranked by line-item revenue over every sale."""
    service = AnalyticsService()
    return await service.get_product_performance(db=db, limit=limit)


@router.get(
    "/payment-methods",
    response_model=PaymentMethodsResponse,
    summary="Payment method distribution",
)
async def get_payment_methods(
    range_token: str | None = Query(None, alias="range", description=RANGE_DESCRIPTION),
    db: AsyncSession = Depends(get_db),
) -> PaymentMethodsResponse:
    """Revenue and sale count per payment method within a range."""
    service = AnalyticsService()
    return await service.get_payment_methods(db=db, range_token=range_token)


@router.get(
    "/customers",
    response_model=CustomerRankingListResponse,
    summary="Top customers",
)
async def get_top_customers(
    range_token: str | None = Query(None, alias="range", description=RANGE_DESCRIPTION),
    limit: int | None = Query(
        None,
        ge=1,
        le=100,
        description="Maximum number of customers (default 5).",
    ),
    db: AsyncSession = Depends(get_db),
) -> CustomerRankingListResponse:
    """Customers ranked by amount spent within a range. Sales without a customer are ignored."""
    service = AnalyticsService()
    return await service.get_top_customers(db=db, range_token=range_token, limit=limit)
