"""Test fixtures for seeder feature tests."""

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from app.core.config import get_settings
from app.features.business_settings.schemas import BusinessSettingsResponse
from app.features.business_settings.service import BusinessSettingsService


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read environment-driven settings for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def seeder_env(monkeypatch):
    """Set APP_ENV and the production override, then drop cached settings."""

    def _set(app_env: str, allow_production: bool = False) -> None:
        monkeypatch.setenv("APP_ENV", app_env)
        monkeypatch.setenv("SEEDER_ALLOW_PRODUCTION", str(allow_production).lower())
        get_settings.cache_clear()

    return _set


@pytest.fixture
def business_profile():
    """Business settings with a 10% tax rate."""
    profile = BusinessSettingsResponse(
        business_name="Demo Shop", tax_rate=Decimal("10"), currency="NGN", is_default=True
    )
    with patch.object(
        BusinessSettingsService, "get_business_settings", AsyncMock(return_value=profile)
    ):
        yield profile
