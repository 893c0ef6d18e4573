"""Tests for request middleware."""

import uuid
from unittest.mock import AsyncMock, patch

from app.core.exceptions import NotFoundError
from app.features.products.service import ProductService


async def test_request_id_middleware_generates_id(client):
    """Middleware should generate a UUID request ID if not provided."""
    response = await client.get("/health")

    request_id = response.headers.get("X-Request-ID")
    assert request_id is not None
    uuid.UUID(request_id)


async def test_request_id_middleware_preserves_provided_id(client):
    """Middleware should echo a client-provided request ID."""
    response = await client.get("/health", headers={"X-Request-ID": "till-7-0001"})

    assert response.headers["X-Request-ID"] == "till-7-0001"


async def test_request_id_middleware_different_ids_per_request(client):
    """Each request should get a unique ID if not provided."""
    response1 = await client.get("/health")
    response2 = await client.get("/health")

    assert response1.headers["X-Request-ID"] != response2.headers["X-Request-ID"]


async def test_problem_document_carries_request_id(client):
    """Error bodies should quote the same request ID as the header."""
    with patch.object(
        ProductService, "get_product", AsyncMock(side_effect=NotFoundError("Product not found: x"))
    ):
        response = await client.get("/products/x", headers={"X-Request-ID": "trace-me"})

    body = response.json()
    assert response.headers["X-Request-ID"] == "trace-me"
    assert body["request_id"] == "trace-me"
    assert body["instance"] == "/requests/trace-me"
