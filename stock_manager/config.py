"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
Remote store credentials are NOT configured here: they are entered at runtime
and persisted in the local store (see services.gateway).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SMS_",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (serves API docs outside dev)",
    )

    # =========================================================================
    # Local durable storage
    # =========================================================================
    local_storage_path: str = Field(
        default="./local_storage/sms_storage.json",
        description="JSON file backing the local key-value cache",
    )
    seed_sample_data: bool = Field(
        default=True,
        description="Show sample products on a first run with no cache and no remote",
    )

    # =========================================================================
    # Remote table store
    # =========================================================================
    remote_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Remote store request timeout in seconds",
    )

    # =========================================================================
    # Inventory rules
    # =========================================================================
    warning_window_days: int = Field(
        default=30,
        ge=0,
        description="Days ahead of expiry at which a product counts as expiring soon",
    )
    low_stock_threshold: int = Field(
        default=10,
        ge=0,
        description="Quantity strictly below which a product counts as low stock",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON",
    )

    @property
    def docs_enabled(self) -> bool:
        """Interactive API docs are served in dev, or anywhere with debug on."""
        return self.debug or self.environment == "dev"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
