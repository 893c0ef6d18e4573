"""Sales analytics aggregator.

Pure, synchronous passes over an in-memory snapshot of sales:
- filter_by_range: Keep sales inside a named time window
- daily_series: Fixed trailing window of per-day revenue and order counts
- rank_products: Best-selling products by line-item revenue
- payment_distribution: Revenue and count per payment method
- rank_customers: Top customers by amount spent
- summarize: Revenue, count, average and 30-day growth
- build_report: All of the above in one call

Revenue is always the pre-tax ``total``. Grouping uses insertion-ordered
dicts, so equal revenues keep first-encounter order. None of these functions
raise on malformed records; defaults are applied when records are built
(see ``records.py``).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum

from app.core.logging import get_logger
from app.features.analytics.records import ZERO, SaleRecord

logger = get_logger(__name__)

UNKNOWN_PAYMENT_METHOD = "Unknown"
GROWTH_WINDOW_DAYS = 30
DEFAULT_TREND_DAYS = 30
DEFAULT_PRODUCT_LIMIT = 5
DEFAULT_CUSTOMER_LIMIT = 5


class TimeRange(str, Enum):
    """Named time windows accepted by the filter."""

    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    LAST_90_DAYS = "90days"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"

    @classmethod
    def parse(cls, token: str | TimeRange | None) -> TimeRange:
        """Resolve a range token, falling back to 30 days.

        Args:
            token: Caller-supplied token.

        Returns:
            The matching range, or LAST_30_DAYS for anything unrecognized.
        """
        if isinstance(token, TimeRange):
            return token
        try:
            return cls(token)
        except ValueError:
            logger.warning(
                "analytics.unknown_range",
                range=token,
                fallback=cls.LAST_30_DAYS.value,
            )
            return cls.LAST_30_DAYS


_ROLLING_DAYS = {
    TimeRange.LAST_7_DAYS: 7,
    TimeRange.LAST_30_DAYS: 30,
    TimeRange.LAST_90_DAYS: 90,
}


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class DailyPoint:
    """Revenue and order count for one calendar day.

    Attributes:
        date: Calendar day in the reference timezone.
        label: Short display label, e.g. "Oct 19".
        revenue: Sum of sale totals on that day.
        orders: Number of sales on that day.
    """

    date: date
    label: str
    revenue: Decimal
    orders: int


@dataclass(frozen=True)
class ProductPerformance:
    """Units sold and revenue for one product name."""

    name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True)
class PaymentMethodShare:
    """Revenue and sale count for one payment method."""

    name: str
    value: Decimal
    count: int


@dataclass(frozen=True)
class CustomerRanking:
    """Purchases and amount spent by one customer.

    Attributes:
        id: Customer identifier.
        name: Name taken from the first sale seen for this customer.
        purchases: Number of sales.
        spent: Sum of sale totals.
    """

    id: str
    name: str
    purchases: int
    spent: Decimal

    @property
    def average_order(self) -> Decimal | None:
        """Spent per purchase; undefined (None) without purchases."""
        if self.purchases == 0:
            return None
        return self.spent / self.purchases


@dataclass(frozen=True)
class MetricsSummary:
    """Headline figures for a filtered period.

    Attributes:
        total_revenue: Sum of totals over the filtered sales.
        sales_count: Number of filtered sales.
        average_sale: total_revenue / sales_count, 0 when there are none.
        growth_rate: Percent change against the previous 30 days
            (30-day range only, otherwise 0).
        previous_period_revenue: Revenue of the previous 30 days
            (30-day range only, otherwise 0).
    """

    total_revenue: Decimal
    sales_count: int
    average_sale: Decimal
    growth_rate: Decimal
    previous_period_revenue: Decimal


@dataclass(frozen=True)
class AnalyticsReport:
    """Everything the analytics view shows for one range."""

    range: TimeRange
    generated_at: datetime
    metrics: MetricsSummary
    trend: list[DailyPoint] = field(default_factory=list)
    top_products: list[ProductPerformance] = field(default_factory=list)
    payment_methods: list[PaymentMethodShare] = field(default_factory=list)
    top_customers: list[CustomerRanking] = field(default_factory=list)


# =============================================================================
# Time helpers
# =============================================================================


def _local_day(moment: datetime, now: datetime) -> date | None:
    try:
        return moment.astimezone(now.tzinfo).date()
    except OverflowError:
        # Parseable but unrepresentable in the local timezone (e.g. 9999-12-31T23:59Z).
        return None


def _start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _start_of_previous_month(now: datetime) -> datetime:
    current = _start_of_month(now)
    if current.month == 1:
        return current.replace(year=current.year - 1, month=12)
    return current.replace(month=current.month - 1)


def range_bounds(time_range: TimeRange, now: datetime) -> tuple[datetime, datetime | None]:
    """Return ``(start, end)`` for a range; ``end`` is exclusive or None.

    Args:
        time_range: Resolved range.
        now: Aware reference instant.

    Returns:
        Window start, and window end for closed ranges (lastMonth).
    """
    if time_range in _ROLLING_DAYS:
        return now - timedelta(days=_ROLLING_DAYS[time_range]), None
    if time_range is TimeRange.THIS_MONTH:
        return _start_of_month(now), None
    return _start_of_previous_month(now), _start_of_month(now)


# =============================================================================
# Aggregations
# =============================================================================


def filter_by_range(
    sales: Iterable[SaleRecord],
    range_token: str | TimeRange | None,
    now: datetime,
) -> list[SaleRecord]:
    """Keep sales whose date falls inside the named window.

    Args:
        sales: Sale snapshot.
        range_token: Range token; unknown tokens mean 30 days.
        now: Aware reference instant.

    Returns:
        Matching sales in input order. Undated sales are dropped.
    """
    start, end = range_bounds(TimeRange.parse(range_token), now)
    return [
        sale
        for sale in sales
        if sale.date is not None and sale.date >= start and (end is None or sale.date < end)
    ]


def daily_series(
    sales: Iterable[SaleRecord],
    now: datetime,
    days: int = DEFAULT_TREND_DAYS,
) -> list[DailyPoint]:
    """Bucket sales into one entry per day for the trailing ``days`` days.

    The window always ends today and always has exactly ``days`` entries,
    oldest first. Sales outside it (or without a date) are ignored.

    Args:
        sales: Sale snapshot (normally unfiltered).
        now: Aware reference instant; days are taken in its timezone.
        days: Window length.

    Returns:
        Daily points in chronological order.
    """
    today = now.date()
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    revenue: dict[date, Decimal] = {day: ZERO for day in window}
    orders: dict[date, int] = {day: 0 for day in window}

    for sale in sales:
        if sale.date is None:
            continue
        day = _local_day(sale.date, now)
        if day is None or day not in revenue:
            continue
        revenue[day] += sale.total
        orders[day] += 1

    return [
        DailyPoint(date=day, label=day.strftime("%b %d"), revenue=revenue[day], orders=orders[day])
        for day in window
    ]


def rank_products(
    sales: Iterable[SaleRecord],
    limit: int = DEFAULT_PRODUCT_LIMIT,
) -> list[ProductPerformance]:
    """Rank products by line-item revenue.

    Args:
        sales: Sale snapshot.
        limit: Maximum number of entries returned.

    Returns:
        Products by descending revenue; ties keep first-encounter order.
    """
    quantities: dict[str, int] = {}
    revenues: dict[str, Decimal] = {}
    for sale in sales:
        for item in sale.items:
            if item.product is None:
                continue
            name = item.product.name
            quantities[name] = quantities.get(name, 0) + item.quantity
            revenues[name] = revenues.get(name, ZERO) + item.total

    ranked = sorted(
        (
            ProductPerformance(name=name, quantity=quantities[name], revenue=revenues[name])
            for name in revenues
        ),
        key=lambda entry: entry.revenue,
        reverse=True,
    )
    return ranked[: max(limit, 0)]


def payment_method_label(method: str | None) -> str:
    """Display label for a payment method: first character upper-cased."""
    if not method:
        return UNKNOWN_PAYMENT_METHOD
    return method[0].upper() + method[1:]


def payment_distribution(sales: Iterable[SaleRecord]) -> list[PaymentMethodShare]:
    """Sum revenue and count per payment method.

    Sales are grouped by the raw method, so ``cash`` and ``Cash`` stay
    separate entries even though both are labelled "Cash".

    Args:
        sales: Sale snapshot.

    Returns:
        One share per raw method, in first-encounter order.
    """
    values: dict[str | None, Decimal] = {}
    counts: dict[str | None, int] = {}
    for sale in sales:
        method = sale.payment_method or None
        values[method] = values.get(method, ZERO) + sale.total
        counts[method] = counts.get(method, 0) + 1

    return [
        PaymentMethodShare(
            name=payment_method_label(method), value=values[method], count=counts[method]
        )
        for method in values
    ]


def rank_customers(
    sales: Iterable[SaleRecord],
    limit: int = DEFAULT_CUSTOMER_LIMIT,
) -> list[CustomerRanking]:
    """Rank customers by amount spent.

    Sales without a customer are left out entirely.

    Args:
        sales: Sale snapshot.
        limit: Maximum number of entries returned.

    Returns:
        Customers by descending spend; ties keep first-encounter order.
    """
    names: dict[str, str] = {}
    purchases: dict[str, int] = {}
    spent: dict[str, Decimal] = {}
    for sale in sales:
        if sale.customer is None:
            continue
        customer_id = sale.customer.id
        names.setdefault(customer_id, sale.customer.name)
        purchases[customer_id] = purchases.get(customer_id, 0) + 1
        spent[customer_id] = spent.get(customer_id, ZERO) + sale.total

    ranked = sorted(
        (
            CustomerRanking(
                id=customer_id,
                name=names[customer_id],
                purchases=purchases[customer_id],
                spent=spent[customer_id],
            )
            for customer_id in names
        ),
        key=lambda entry: entry.spent,
        reverse=True,
    )
    return ranked[: max(limit, 0)]


def _growth_rate(current: Decimal, previous: Decimal) -> Decimal:
    if previous == 0:
        return ZERO
    rate = (current - previous) / previous * 100
    with localcontext() as ctx:
        # quantize needs every integer digit plus two decimals.
        ctx.prec = max(ctx.prec, rate.adjusted() + 3)
        return rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def summarize(
    filtered: Sequence[SaleRecord],
    all_sales: Iterable[SaleRecord],
    range_token: str | TimeRange | None,
    now: datetime,
) -> MetricsSummary:
    """Headline metrics for the filtered sales.

    Growth is only computed for the 30-day range: the filtered revenue is
    compared with revenue dated in ``[now - 60d, now - 30d)`` across the
    unfiltered collection.

    Args:
        filtered: Sales already filtered to the range.
        all_sales: Unfiltered snapshot.
        range_token: Range the sales were filtered with.
        now: Aware reference instant.

    Returns:
        Metrics summary.
    """
    total_revenue = sum((sale.total for sale in filtered), ZERO)
    sales_count = len(filtered)
    average_sale = total_revenue / sales_count if sales_count > 0 else ZERO

    growth_rate = ZERO
    previous_revenue = ZERO
    if TimeRange.parse(range_token) is TimeRange.LAST_30_DAYS:
        window_end = now - timedelta(days=GROWTH_WINDOW_DAYS)
        window_start = now - timedelta(days=GROWTH_WINDOW_DAYS * 2)
        previous_revenue = sum(
            (
                sale.total
                for sale in all_sales
                if sale.date is not None and window_start <= sale.date < window_end
            ),
            ZERO,
        )
        growth_rate = _growth_rate(total_revenue, previous_revenue)

    return MetricsSummary(
        total_revenue=total_revenue,
        sales_count=sales_count,
        average_sale=average_sale,
        growth_rate=growth_rate,
        previous_period_revenue=previous_revenue,
    )


def build_report(
    sales: Iterable[SaleRecord],
    range_token: str | TimeRange | None,
    now: datetime,
    *,
    product_limit: int = DEFAULT_PRODUCT_LIMIT,
    customer_limit: int = DEFAULT_CUSTOMER_LIMIT,
    trend_days: int = DEFAULT_TREND_DAYS,
) -> AnalyticsReport:
    """Compute the full analytics view for one range.

    Args:
        sales: Unfiltered snapshot.
        range_token: Range token; unknown tokens mean 30 days.
        now: Aware reference instant.
        product_limit: Number of top products.
        customer_limit: Number of top customers.
        trend_days: Length of the daily trend window.

    Returns:
        The report, echoing the effective range.
    """
    snapshot = list(sales)
    time_range = TimeRange.parse(range_token)
    filtered = filter_by_range(snapshot, time_range, now)

    return AnalyticsReport(
        range=time_range,
        generated_at=now,
        metrics=summarize(filtered, snapshot, time_range, now),
        trend=daily_series(snapshot, now, days=trend_days),
        top_products=rank_products(filtered, limit=product_limit),
        payment_methods=payment_distribution(filtered),
        top_customers=rank_customers(filtered, limit=customer_limit),
    )
