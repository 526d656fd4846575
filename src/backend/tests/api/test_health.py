"""
Tests for health and utility endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.unit
class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient) -> None:
        """Test basic health check endpoint returns 200."""
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"

    async def test_root_endpoint(self, client: AsyncClient) -> None:
        """Test root endpoint returns API info."""
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "CivicVoice"


@pytest.mark.unit
class TestMiddleware:
    """Test response headers added by middleware."""

    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/stats")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Content-Security-Policy" in response.headers

    async def test_request_id_generated(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.headers.get("X-Request-ID")

    async def test_request_id_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


@pytest.mark.unit
class TestAPIDocumentation:
    """Test API documentation endpoints."""

    async def test_openapi_schema_follows_debug(self, client: AsyncClient) -> None:
        """Test OpenAPI schema is accessible only in debug mode."""
        from core.config import settings

        response = await client.get("/openapi.json")
        if settings.DEBUG:
            assert response.status_code == 200
            assert "paths" in response.json()
        else:
            assert response.status_code == 404
