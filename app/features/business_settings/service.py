"""Service layer for the single business settings record."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.logging import get_logger
from app.features.business_settings.schemas import (
    BusinessSettingsResponse,
    BusinessSettingsUpdate,
)
from app.features.data_platform.models import BusinessSettings

logger = get_logger(__name__)


class BusinessSettingsService:
    """Reads and upserts the business profile.

    There is at most one row; reads never fail and fall back to the
    configured defaults.
    """

    def __init__(self) -> None:
        """Initialize business settings service."""
        self.settings = get_settings()

    async def get_row(self, db: AsyncSession) -> BusinessSettings | None:
        """Load the stored row, if any."""
        stmt = select(BusinessSettings).order_by(BusinessSettings.created_at).limit(1)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    def defaults(self) -> BusinessSettingsResponse:
        """Profile built from configuration."""
        return BusinessSettingsResponse(
            business_name=self.settings.default_business_name,
            tax_rate=self.settings.default_tax_rate,
            currency=self.settings.default_currency,
            is_default=True,
        )

    async def get_business_settings(self, db: AsyncSession) -> BusinessSettingsResponse:
        """Return the stored profile or the configured defaults."""
        row = await self.get_row(db)
        if row is None:
            return self.defaults()
        return BusinessSettingsResponse.model_validate(row)

    async def upsert(
        self,
        db: AsyncSession,
        data: BusinessSettingsUpdate,
    ) -> BusinessSettingsResponse:
        """Update the stored profile, creating it on first save.

        Args:
            db: Database session.
            data: Complete profile.

        Returns:
            The saved profile.
        """
        row = await self.get_row(db)
        values = data.model_dump()
        created = row is None
        if row is None:
            row = BusinessSettings(**values)
            db.add(row)
        else:
            for field, value in values.items():
                setattr(row, field, value)
        await db.flush()
        await db.refresh(row)

        logger.info(
            "business_settings.saved",
            created=created,
            tax_rate=str(row.tax_rate),
            currency=row.currency,
        )
        return BusinessSettingsResponse.model_validate(row)
