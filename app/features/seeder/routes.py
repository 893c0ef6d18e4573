"""FastAPI routes for seeder operations.

Provides REST endpoints for loading and clearing demo data from the
dashboard admin panel.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import DatabaseError
from app.core.logging import get_logger
from app.features.seeder import schemas, service

logger = get_logger(__name__)

router = APIRouter(prefix="/seeder", tags=["seeder"])


@router.get(
    "/status",
    response_model=schemas.SeederStatus,
    summary="Get database status",
    description="Returns current row counts and the sale date range.",
)
async def get_status(
    db: AsyncSession = Depends(get_db),
) -> schemas.SeederStatus:
    """Get current database row counts."""
    return await service.get_status(db)


@router.post(
    "/generate",
    response_model=schemas.GenerateResult,
    status_code=status.HTTP_201_CREATED,
    summary="Generate demo data",
    description="""
Insert reproducible demo products, customers and sales.

The same `seed` run at the same moment yields the same records. Sales are
spread over the trailing `days`, have 1-3 items, random payment methods and
an optional customer. Existing rows are kept.

Returns 403 in production unless `SEEDER_ALLOW_PRODUCTION` is set.
""",
)
async def generate_data(
    params: schemas.GenerateParams,
    db: AsyncSession = Depends(get_db),
) -> schemas.GenerateResult:
    """Generate demo data."""
    service.check_seeder_enabled()
    try:
        return await service.generate_data(db, params)
    except SQLAlchemyError as e:
        logger.error(
            "seeder.generate_failed",
            seed=params.seed,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise DatabaseError(
            message="Failed to generate demo data",
            details={"error": str(e)},
        ) from e


@router.delete(
    "/data",
    response_model=schemas.DeleteResult,
    summary="Delete data",
    description="Delete every sale, sale item, customer and product. "
    "Business settings are kept. Returns 403 in production unless allowed.",
)
async def delete_data(
    db: AsyncSession = Depends(get_db),
) -> schemas.DeleteResult:
    """Delete all demo-able data."""
    service.check_seeder_enabled()
    try:
        return await service.delete_data(db)
    except SQLAlchemyError as e:
        logger.error(
            "seeder.delete_failed",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise DatabaseError(
            message="Failed to delete data",
            details={"error": str(e)},
        ) from e
