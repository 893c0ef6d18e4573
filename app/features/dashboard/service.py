"""Service layer for the dashboard summary.

Counts and sums run as SQL aggregates; only the handful of recent sales
are fetched as rows.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.features.dashboard.schemas import DashboardSummary, RecentSale
from app.features.data_platform.models import Customer, Product, Sale, SaleItem
from app.shared.utils import quantize_money

logger = get_logger(__name__)

RECENT_SALES_LIMIT = 5


class DashboardService:
    """Service for dashboard headline numbers."""

    async def get_summary(self, db: AsyncSession) -> DashboardSummary:
        """Compute the dashboard summary.

        Args:
            db: Database session.

        Returns:
            Revenue, counts, average sale and the most recent sales.
        """
        totals = await db.execute(
            select(func.coalesce(func.sum(Sale.total), 0), func.count(Sale.id))
        )
        revenue, sales_count = totals.one()
        revenue = Decimal(revenue)

        customers_count = (
            await db.execute(select(func.count()).select_from(Customer))
        ).scalar_one()
        products_count = (
            await db.execute(select(func.count()).select_from(Product))
        ).scalar_one()

        recent_stmt = (
            select(
                Sale.id,
                Sale.date,
                Sale.total,
                Customer.name.label("customer_name"),
                func.count(SaleItem.id).label("item_count"),
            )
            .outerjoin(Customer, Sale.customer_id == Customer.id)
            .outerjoin(SaleItem, SaleItem.sale_id == Sale.id)
            .group_by(Sale.id, Customer.name)
            .order_by(Sale.date.desc(), Sale.id)
            .limit(RECENT_SALES_LIMIT)
        )
        recent_rows = (await db.execute(recent_stmt)).all()

        average_sale = quantize_money(revenue / sales_count) if sales_count else Decimal("0.00")

        logger.info(
            "dashboard.summary_computed",
            sales_count=sales_count,
            customers_count=customers_count,
            products_count=products_count,
        )

        return DashboardSummary(
            total_revenue=revenue,
            sales_count=sales_count,
            customers_count=customers_count,
            products_count=products_count,
            average_sale=average_sale,
            recent_sales=[
                RecentSale(
                    id=row.id,
                    date=row.date,
                    total=row.total,
                    customer_name=row.customer_name,
                    item_count=row.item_count,
                )
                for row in recent_rows
            ],
        )
