"""Route tests for business settings endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi import status
from httpx import AsyncClient

from app.features.business_settings.schemas import BusinessSettingsResponse
from app.features.business_settings.service import BusinessSettingsService


async def test_get_returns_defaults_without_row(
    client: AsyncClient, mock_db_session: MagicMock
) -> None:
    """Test GET never 404s when nothing has been saved."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    mock_db_session.execute.return_value = result

    response = await client.get("/settings/business")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["is_default"] is True
    assert data["currency"] == "NGN"


async def test_put_saves(client: AsyncClient) -> None:
    """Test PUT forwards the profile and returns the saved version."""
    saved = BusinessSettingsResponse(
        id="b" * 32,
        business_name="Mama Put Foods",
        tax_rate=Decimal("5.00"),
        currency="NGN",
    )
    with patch.object(BusinessSettingsService, "upsert", AsyncMock(return_value=saved)) as mock:
        response = await client.put(
            "/settings/business",
            json={"business_name": "Mama Put Foods", "tax_rate": "5", "currency": "NGN"},
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["tax_rate"] == "5.00"
    assert mock.await_args.kwargs["data"].business_name == "Mama Put Foods"


async def test_put_rejects_bad_currency(client: AsyncClient) -> None:
    """Test currency must be three upper-case letters."""
    response = await client.put(
        "/settings/business",
        json={"business_name": "Shop", "tax_rate": "5", "currency": "naira"},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
