"""Service layer for seeder operations."""

from __future__ import annotations

import time
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import BadRequestError, ForbiddenError
from app.core.logging import get_logger
from app.features.business_settings.service import BusinessSettingsService
from app.features.data_platform.models import Sale
from app.features.seeder import schemas
from app.shared.seeder import DataSeeder, SeederConfig

logger = get_logger(__name__)


def check_seeder_enabled() -> None:
    """Check if seeder operations are allowed in the current environment.

    Raises:
        ForbiddenError: If running in production without SEEDER_ALLOW_PRODUCTION.
    """
    settings = get_settings()
    if settings.is_production and not settings.seeder_allow_production:
        logger.warning("seeder.blocked", reason="production_guard")
        raise ForbiddenError(
            message="Seeder operations are not allowed in production. "
            "Set SEEDER_ALLOW_PRODUCTION=true to enable.",
        )


async def get_status(db: AsyncSession) -> schemas.SeederStatus:
    """Get current row counts and the sale date range.

    Args:
        db: Async database session.

    Returns:
        SeederStatus with counts per table.
    """
    counts = await DataSeeder(SeederConfig()).get_current_counts(db)

    date_range = await db.execute(select(func.min(Sale.date), func.max(Sale.date)))
    first_sale, last_sale = date_range.one()

    return schemas.SeederStatus(
        products=counts["products"],
        customers=counts["customers"],
        sales=counts["sales"],
        sale_items=counts["sale_items"],
        first_sale_date=first_sale,
        last_sale_date=last_sale,
    )


async def generate_data(
    db: AsyncSession,
    params: schemas.GenerateParams,
    now: datetime | None = None,
) -> schemas.GenerateResult:
    """Generate demo data on top of whatever is stored.

    Generated sales use the current business tax rate.

    Args:
        db: Async database session.
        params: Generation parameters.
        now: Reference time for sale dates; defaults to now in the business timezone.

    Returns:
        GenerateResult with counts and timing.

    Raises:
        BadRequestError: If the parameters cannot produce a dataset.
    """
    business = await BusinessSettingsService().get_business_settings(db)

    try:
        config = SeederConfig(
            seed=params.seed,
            customers=params.customers,
            products=params.products,
            sales=params.sales,
            days=params.days,
            tax_rate=business.tax_rate,
        )
    except ValueError as e:
        raise BadRequestError(message=str(e)) from e

    start_time = time.perf_counter()
    result = await DataSeeder(config).generate_full(
        db, now or datetime.now(get_settings().timezone)
    )
    duration = time.perf_counter() - start_time

    return schemas.GenerateResult(
        records_created={
            "products": result.products_count,
            "customers": result.customers_count,
            "sales": result.sales_count,
            "sale_items": result.sale_items_count,
        },
        seed=result.seed,
        duration_seconds=round(duration, 2),
        message=f"Generated {result.sales_count:,} sales with seed {result.seed}",
    )


async def delete_data(db: AsyncSession) -> schemas.DeleteResult:
    """Delete all sales, sale items, customers and products.

    Args:
        db: Async database session.

    Returns:
        DeleteResult with counts per table.
    """
    counts = await DataSeeder(SeederConfig()).delete_data(db)
    return schemas.DeleteResult(
        records_deleted=counts,
        message=f"Deleted {sum(counts.values()):,} records",
    )
