"""Integration test fixtures for API testing.

This module provides FastAPI application and client fixtures. The
application is created without running its lifespan, so no OTLP exporter
is started during tests.
"""

import pytest
from fastapi.testclient import TestClient

from chunk_cycle_detector.infrastructure.api.main import create_app


@pytest.fixture
def app():
    """Create FastAPI app for testing."""
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)
