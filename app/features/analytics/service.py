"""Service layer for analytics operations.

Loads a snapshot of sales from the store and hands it to the pure
aggregator. The database is only touched in ``load_records``.
"""

from collections.abc import Sequence
from datetime import MINYEAR, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.features.analytics import aggregator
from app.features.analytics.aggregator import TimeRange
from app.features.analytics.records import SaleRecord, parse_timestamp, record_from_sale
from app.features.analytics.schemas import (
    AnalyticsReportResponse,
    CustomerRankingListResponse,
    CustomerRankingResponse,
    DailyPointResponse,
    MetricsResponse,
    MetricsViewResponse,
    PaymentMethodShareResponse,
    PaymentMethodsResponse,
    ProductPerformanceResponse,
    ProductRankingResponse,
    ReportRequest,
    TrendResponse,
)
from app.features.data_platform.models import Sale, SaleItem

logger = get_logger(__name__)


class AnalyticsService:
    """Service for computing sales analytics.

    Every view is computed in memory over the most recent
    ``analytics_max_sales`` sales.
    """

    def __init__(self) -> None:
        """Initialize analytics service."""
        self.settings = get_settings()

    def now(self) -> datetime:
        """Reference instant in the business timezone."""
        return datetime.now(self.settings.timezone)

    async def load_records(self, db: AsyncSession) -> list[SaleRecord]:
        """Fetch the sale snapshot with customers and items loaded.

        Args:
            db: Database session.

        Returns:
            Sale records, newest first.
        """
        stmt = (
            select(Sale)
            .options(
                selectinload(Sale.customer),
                selectinload(Sale.items).selectinload(SaleItem.product),
            )
            .order_by(Sale.date.desc(), Sale.id)
            .limit(self.settings.analytics_max_sales)
        )
        result = await db.execute(stmt)
        records = [record_from_sale(sale) for sale in result.scalars().all()]

        logger.debug("analytics.records_loaded", count=len(records))
        return records

    def _build_report(
        self,
        records: Sequence[SaleRecord],
        range_token: str | None,
        now: datetime,
        product_limit: int | None = None,
        customer_limit: int | None = None,
    ) -> AnalyticsReportResponse:
        report = aggregator.build_report(
            records,
            range_token,
            now,
            product_limit=product_limit or self.settings.analytics_top_products,
            customer_limit=customer_limit or self.settings.analytics_top_customers,
            trend_days=self.settings.analytics_trend_days,
        )

        logger.info(
            "analytics.report_computed",
            range=report.range.value,
            sales_total=len(records),
            sales_in_range=report.metrics.sales_count,
            total_revenue=float(report.metrics.total_revenue),
            growth_rate=float(report.metrics.growth_rate),
        )
        return AnalyticsReportResponse.model_validate(report)

    async def get_report(
        self,
        db: AsyncSession,
        range_token: str | None = None,
    ) -> AnalyticsReportResponse:
        """Compute the full analytics view from the store.

        Args:
            db: Database session.
            range_token: Range token (defaults to the configured range).

        Returns:
            Analytics report.
        """
        records = await self.load_records(db)
        return self._build_report(
            records, range_token or self.settings.analytics_default_range, self.now()
        )

    def report_from_request(self, request: ReportRequest) -> AnalyticsReportResponse:
        """Compute a report over caller-supplied records.

        Args:
            request: Raw sale mappings plus range and limits.

        Returns:
            Analytics report.

        Raises:
            ValidationError: If ``now`` is too early to look back over the
                longest window.
        """
        records = [SaleRecord.from_mapping(raw) for raw in request.sales]
        now = self.now()
        if request.now is not None:
            now = parse_timestamp(request.now) or now
        if now.year <= MINYEAR:
            raise ValidationError(
                message="Reference time must be after year 1",
                details={"now": now.isoformat()},
            )
        return self._build_report(
            records,
            request.range,
            now,
            product_limit=request.product_limit,
            customer_limit=request.customer_limit,
        )

    async def get_trend(self, db: AsyncSession) -> TrendResponse:
        """Daily revenue and orders for the trailing trend window."""
        records = await self.load_records(db)
        days = self.settings.analytics_trend_days
        points = aggregator.daily_series(records, self.now(), days=days)
        return TrendResponse(
            days=days,
            points=[DailyPointResponse.model_validate(point) for point in points],
        )

    async def get_metrics(
        self,
        db: AsyncSession,
        range_token: str | None = None,
    ) -> MetricsViewResponse:
        """Headline metrics for a range."""
        records = await self.load_records(db)
        now = self.now()
        time_range = TimeRange.parse(range_token or self.settings.analytics_default_range)
        filtered = aggregator.filter_by_range(records, time_range, now)
        summary = aggregator.summarize(filtered, records, time_range, now)
        return MetricsViewResponse(
            range=time_range,
            metrics=MetricsResponse.model_validate(summary),
        )

    async def get_top_products(
        self,
        db: AsyncSession,
        range_token: str | None = None,
        limit: int | None = None,
    ) -> ProductRankingResponse:
        """Best-selling products within a range."""
        records = await self.load_records(db)
        time_range = TimeRange.parse(range_token or self.settings.analytics_default_range)
        limit = limit or self.settings.analytics_top_products
        filtered = aggregator.filter_by_range(records, time_range, self.now())
        ranked = aggregator.rank_products(filtered, limit=limit)
        return ProductRankingResponse(
            range=time_range,
            limit=limit,
            products=[ProductPerformanceResponse.model_validate(entry) for entry in ranked],
        )

    async def get_product_performance(
        self,
        db: AsyncSession,
        limit: int | None = None,
    ) -> ProductRankingResponse:
        """Best-selling products across every loaded sale."""
        records = await self.load_records(db)
        limit = limit or self.settings.analytics_product_performance_limit
        ranked = aggregator.rank_products(records, limit=limit)

        logger.info("analytics.product_performance_computed", limit=limit, products=len(ranked))
        return ProductRankingResponse(
            range=None,
            limit=limit,
            products=[ProductPerformanceResponse.model_validate(entry) for entry in ranked],
        )

    async def get_payment_methods(
        self,
        db: AsyncSession,
        range_token: str | None = None,
    ) -> PaymentMethodsResponse:
        """Payment method distribution within a range."""
        records = await self.load_records(db)
        time_range = TimeRange.parse(range_token or self.settings.analytics_default_range)
        filtered = aggregator.filter_by_range(records, time_range, self.now())
        shares = aggregator.payment_distribution(filtered)
        return PaymentMethodsResponse(
            range=time_range,
            methods=[PaymentMethodShareResponse.model_validate(share) for share in shares],
        )

    async def get_top_customers(
        self,
        db: AsyncSession,
        range_token: str | None = None,
        limit: int | None = None,
    ) -> CustomerRankingListResponse:
        """Top customers by spend within a range."""
        records = await self.load_records(db)
        time_range = TimeRange.parse(range_token or self.settings.analytics_default_range)
        limit = limit or self.settings.analytics_top_customers
        filtered = aggregator.filter_by_range(records, time_range, self.now())
        ranked = aggregator.rank_customers(filtered, limit=limit)
        return CustomerRankingListResponse(
            range=time_range,
            limit=limit,
            customers=[CustomerRankingResponse.model_validate(entry) for entry in ranked],
        )
