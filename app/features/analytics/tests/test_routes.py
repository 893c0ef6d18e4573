"""Route tests for analytics endpoints."""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import status
from httpx import AsyncClient

from app.features.analytics.records import SaleRecord
from app.features.analytics.service import AnalyticsService


@pytest.fixture
def stored_sales(sample_sales: list[SaleRecord], now: datetime):
    """Serve the sample snapshot instead of querying the database."""
    with (
        patch.object(AnalyticsService, "load_records", AsyncMock(return_value=sample_sales)),
        patch.object(AnalyticsService, "now", return_value=now),
    ):
        yield sample_sales


class TestGetReport:
    """Tests for GET /analytics/report."""

    async def test_report(self, client: AsyncClient, stored_sales) -> None:
        """Test the full report is returned with string-encoded amounts."""
        response = await client.get("/analytics/report", params={"range": "7days"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["range"] == "7days"
        assert data["metrics"]["sales_count"] == 3
        assert float(data["metrics"]["total_revenue"]) == 6000.0
        assert float(data["metrics"]["average_sale"]) == 2000.0
        assert len(data["trend"]) == 30
        assert [p["name"] for p in data["top_products"]] == ["Oil", "Rice", "Beans"]

    async def test_unknown_range_echoed_as_default(self, client: AsyncClient, stored_sales) -> None:
        """Test an unknown range is not an error and is reported as 30days."""
        response = await client.get("/analytics/report", params={"range": "forever"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["range"] == "30days"

    async def test_empty_store(self, client: AsyncClient, now: datetime) -> None:
        """Test an empty store yields zeros and a full trend."""
        with (
            patch.object(AnalyticsService, "load_records", AsyncMock(return_value=[])),
            patch.object(AnalyticsService, "now", return_value=now),
        ):
            response = await client.get("/analytics/report")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["metrics"]["sales_count"] == 0
        assert float(data["metrics"]["growth_rate"]) == 0
        assert len(data["trend"]) == 30
        assert data["top_products"] == []
        assert data["payment_methods"] == []
        assert data["top_customers"] == []


class TestPostReport:
    """Tests for POST /analytics/report."""

    async def test_supplied_sales(self, client: AsyncClient, sample_sale_mapping: dict) -> None:
        """Test a report is computed over the request body."""
        response = await client.post(
            "/analytics/report",
            json={
                "range": "lastMonth",
                "now": "2024-11-05T10:00:00+01:00",
                "sales": [sample_sale_mapping, {"total": "abc"}],
            },
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["range"] == "lastMonth"
        assert data["metrics"]["sales_count"] == 1
        assert data["payment_methods"][0]["name"] == "Transfer"

    async def test_negative_total_counts_as_zero(self, client: AsyncClient) -> None:
        """Test a negative sale total degrades to zero instead of failing."""
        response = await client.post(
            "/analytics/report",
            json={
                "now": "2024-10-19T12:00:00Z",
                "sales": [{"date": "2024-10-18T10:00:00Z", "total": -50}],
            },
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["metrics"]["sales_count"] == 1
        assert data["metrics"]["total_revenue"] == "0"
        assert {point["revenue"] for point in data["trend"]} == {"0"}

    async def test_extreme_values_do_not_fail(self, client: AsyncClient) -> None:
        """Test far-future dates and huge totals still produce a report."""
        response = await client.post(
            "/analytics/report",
            json={
                "now": "2024-10-19T12:00:00Z",
                "sales": [
                    {"date": "9999-12-31T23:59:59Z", "total": 5},
                    {"date": "2024-10-18T10:00:00Z", "total": "1e30"},
                    {"date": "2024-09-01T10:00:00Z", "total": "1"},
                ],
            },
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["metrics"]["sales_count"] == 2
        assert sum(point["orders"] for point in data["trend"]) == 1

    async def test_reference_time_in_year_one_is_422(self, client: AsyncClient) -> None:
        """Test a reference time with no room for the look-back windows is rejected."""
        response = await client.post("/analytics/report", json={"now": "0001-02-01T00:00:00Z"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_invalid_limit_is_422(self, client: AsyncClient) -> None:
        """Test request validation errors are problem documents."""
        response = await client.post("/analytics/report", json={"product_limit": 0})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.headers["content-type"].startswith("application/problem+json")


class TestViews:
    """Tests for the individual analytics views."""

    async def test_trend(self, client: AsyncClient, stored_sales) -> None:
        """Test the trend endpoint."""
        response = await client.get("/analytics/trend")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["days"] == 30
        assert data["points"][-1]["date"] == "2024-10-19"
        assert sum(point["orders"] for point in data["points"]) == 4

    async def test_metrics(self, client: AsyncClient, stored_sales) -> None:
        """Test the metrics endpoint."""
        response = await client.get("/analytics/metrics", params={"range": "30days"})

        assert response.status_code == status.HTTP_200_OK
        assert float(response.json()["metrics"]["growth_rate"]) == 62.5

    async def test_products(self, client: AsyncClient, stored_sales) -> None:
        """Test the ranged product view honours its limit."""
        response = await client.get("/analytics/products", params={"range": "7days", "limit": 1})

        assert response.status_code == status.HTTP_200_OK
        assert [p["name"] for p in response.json()["products"]] == ["Oil"]

    async def test_products_limit_validated(self, client: AsyncClient, stored_sales) -> None:
        """Test out-of-range limits are rejected."""
        response = await client.get("/analytics/products", params={"limit": 0})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_product_performance(self, client: AsyncClient, stored_sales) -> None:
        """Test the all-time performance view."""
        response = await client.get("/analytics/products/performance")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["range"] is None
        assert data["limit"] == 10
        assert data["products"][0]["name"] == "Rice"

    async def test_payment_methods(self, client: AsyncClient, stored_sales) -> None:
        """Test the payment method view."""
        response = await client.get("/analytics/payment-methods", params={"range": "90days"})

        assert response.status_code == status.HTTP_200_OK
        names = {method["name"] for method in response.json()["methods"]}
        assert names == {"Cash", "Card", "Mobile_money", "Unknown", "Transfer"}

    async def test_customers(self, client: AsyncClient, stored_sales) -> None:
        """Test the customer view."""
        response = await client.get("/analytics/customers", params={"range": "90days"})

        assert response.status_code == status.HTTP_200_OK
        customers = response.json()["customers"]
        assert [c["id"] for c in customers] == ["c3", "c2", "c1"]
        assert float(customers[2]["average_order"]) == 750.0
