"""
Application configuration using Pydantic settings.
"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Health Raster Parameters
    health_raster_steps: int = Field(
        default=8,
        description="Grid resolution (steps x steps) of the synthetic health raster"
    )
    health_raster_stressed_threshold: float = Field(
        default=-0.3,
        description="Cells whose signal falls below this value are classified as stressed"
    )
    health_raster_warning_threshold: float = Field(
        default=0.2,
        description="Cells whose signal falls below this value are classified as warning"
    )

    # Sensor Placement Parameters
    sensor_target_count: int = Field(
        default=8,
        description="Number of sensors to place inside a field boundary"
    )
    sensor_max_attempts: int = Field(
        default=100,
        description="Maximum rejection-sampling draws per placement request"
    )

    # Display
    default_unit_system: str = Field(
        default="metric",
        description="Unit system used for formatted measurements (metric or imperial)"
    )

    # Persistence
    saved_fields_path: Optional[str] = Field(
        default=None,
        description="JSON file backing saved fields; in-memory storage when unset"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum analysis requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Field Architect",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
