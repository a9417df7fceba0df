"""Infrastructure configuration module.

Centralized configuration management using Pydantic Settings.
"""

from chunk_cycle_detector.infrastructure.config.settings import (
    DetectionSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "DetectionSettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
