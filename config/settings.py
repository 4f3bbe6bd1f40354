"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Fixed business constants live in config/assortment.py.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # RECOMMENDATION THRESHOLDS
    # ===================
    publish_threshold: float = Field(
        default=90,
        ge=0,
        le=100,
        description="Minimum inventory coverage % to recommend publishing"
    )
    unpublish_threshold: float = Field(
        default=50,
        ge=0,
        le=100,
        description="Minimum out-of-stock % to recommend unpublishing"
    )
    publish_temp_threshold: Optional[float] = Field(
        None,
        ge=0,
        le=100,
        description="Reserved for a temporary-publish rule; not read by the analysis"
    )

    # ===================
    # STORE ACTIVITY
    # ===================
    active_organization_number: str = Field(
        default="9000",
        description="Organization number a site must belong to"
    )
    excluded_region: str = Field(
        default="Canada",
        description="Region whose sites never count as active"
    )

    # ===================
    # PERSISTENCE
    # ===================
    plant_store_dir: str = Field(
        default=".plant_store",
        description="Directory holding persisted plant data"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
