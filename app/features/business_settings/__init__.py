"""Business profile used for receipts and the default tax rate."""

from app.features.business_settings.routes import router
from app.features.business_settings.schemas import (
    BusinessSettingsResponse,
    BusinessSettingsUpdate,
)
from app.features.business_settings.service import BusinessSettingsService

__all__ = [
    "BusinessSettingsResponse",
    "BusinessSettingsService",
    "BusinessSettingsUpdate",
    "router",
]
