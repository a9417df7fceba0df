"""Integration tests for health check endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from chunk_cycle_detector import __version__
from chunk_cycle_detector.infrastructure.api.main import app


transport = ASGITransport(app=app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_liveness_check_always_returns_200(self):
        """Test that /health endpoint always returns 200 (liveness)."""
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/health")

            assert response.status_code == 200
            data = response.json()
            assert data["status"] == "healthy"
            assert data["service"] == "chunk-cycle-detector"
            assert data["version"] == __version__

    @pytest.mark.asyncio
    async def test_root_endpoint(self):
        """Test that / describes the API."""
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/")

            assert response.status_code == 200
            assert response.json()["status"] == "operational"

    @pytest.mark.asyncio
    async def test_unknown_route_returns_problem_details(self):
        """Test that 404s use the RFC 7807 format."""
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/nope")

            assert response.status_code == 404
            assert response.headers["content-type"] == "application/problem+json"
            assert response.json()["title"] == "Not Found"
