"""Application configuration using Pydantic Settings.

Centralized configuration management following Clean Architecture principles.
All environment variables should be accessed through this module.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionSettings(BaseSettings):
    """Cycle detection policy settings."""

    model_config = SettingsConfigDict(
        env_prefix="CYCLE_DETECTION_", case_sensitive=False
    )

    throw_on_cycle: bool = Field(
        default=False,
        description="Reject a bundle (HTTP 409) when chunk cycles are detected",
    )
    show_module_detail: bool = Field(
        default=False,
        description="Report the module import behind every hop of a chunk cycle",
    )


class APISettings(BaseSettings):
    """API server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="API_", case_sensitive=False)

    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server",
    )
    port: int = Field(
        default=8000,
        description="Port to bind the API server",
    )


class ObservabilitySettings(BaseSettings):
    """Observability configuration settings (OpenTelemetry, logging, metrics)."""

    model_config = SettingsConfigDict(env_prefix="OTEL_", case_sensitive=False)

    # OpenTelemetry Tracing
    exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP exporter endpoint (gRPC)",
    )
    service_name: str = Field(
        default="chunk-cycle-detector",
        description="Service name for traces and metrics",
    )
    trace_sample_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json_format: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration modules and provides a single settings object.
    Load from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )

    # Sub-settings
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    api: APISettings = Field(default_factory=APISettings)
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )


# Global settings instance (singleton)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton pattern).

    Returns:
        Settings instance loaded from environment
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
