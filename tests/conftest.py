"""Shared test fixtures."""

import pytest

from chunk_cycle_detector.infrastructure.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings from the environment for every test."""
    reset_settings()
    yield
    reset_settings()
