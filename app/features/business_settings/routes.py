"""API routes for business settings."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.business_settings.schemas import (
    BusinessSettingsResponse,
    BusinessSettingsUpdate,
)
from app.features.business_settings.service import BusinessSettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get(
    "/business",
    response_model=BusinessSettingsResponse,
    summary="Get business settings",
    description="Returns the saved business profile, or the configured defaults "
    "(`is_default: true`) when none has been saved. Never 404.",
)
async def get_business_settings(
    db: AsyncSession = Depends(get_db),
) -> BusinessSettingsResponse:
    """Get the business profile."""
    service = BusinessSettingsService()
    return await service.get_business_settings(db=db)


@router.put(
    "/business",
    response_model=BusinessSettingsResponse,
    summary="Save business settings",
    description="Creates the business profile on first save and replaces it afterwards. "
    "The tax rate applies to sales created from then on.",
)
async def put_business_settings(
    data: BusinessSettingsUpdate,
    db: AsyncSession = Depends(get_db),
) -> BusinessSettingsResponse:
    """Save the business profile."""
    service = BusinessSettingsService()
    return await service.upsert(db=db, data=data)
