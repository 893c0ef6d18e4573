"""API routes for the dashboard."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.dashboard.schemas import DashboardSummary
from app.features.dashboard.service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Dashboard summary",
    description="""
Headline numbers over all sales regardless of date:

- `total_revenue`: sum of pre-tax sale totals
- `sales_count`, `customers_count`, `products_count`
- `average_sale`: revenue / sales count, rounded to cents (0 with no sales)
- `recent_sales`: the 5 most recent sales with customer name and item count
""",
)
async def get_summary(
    db: AsyncSession = Depends(get_db),
) -> DashboardSummary:
    """Get the dashboard summary."""
    service = DashboardService()
    return await service.get_summary(db=db)
