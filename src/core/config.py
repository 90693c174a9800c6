"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COMPUTE_UNIT_LIMIT = 500_000
DEFAULT_FEE_SAMPLE_LIMIT = 50
DEFAULT_WEB_APP_URL = "http://localhost:3000"
# Wire widths of the compute-budget directives (u32 limit, u64 price).
MAX_COMPUTE_UNIT_LIMIT = 2**32 - 1
MAX_COMPUTE_UNIT_PRICE = 2**64 - 1


class Settings(BaseSettings):
    """Centralized runtime configuration.

    Project-level values (network, RPC endpoint) live in the project's
    ``config.toml``; these settings only tune the tool itself.
    """

    config_dir_name: str = Field(default=".zklense", validation_alias="ZKLENSE_CONFIG_DIR")
    target_dir_name: str = Field(default="target", validation_alias="ZKLENSE_TARGET_DIR")

    compute_unit_limit: int = Field(
        default=DEFAULT_COMPUTE_UNIT_LIMIT,
        ge=0,
        le=MAX_COMPUTE_UNIT_LIMIT,
        validation_alias="ZKLENSE_COMPUTE_UNIT_LIMIT",
    )
    compute_unit_price: int = Field(
        default=0,
        ge=0,
        le=MAX_COMPUTE_UNIT_PRICE,
        validation_alias="ZKLENSE_COMPUTE_UNIT_PRICE",
    )
    fee_sample_limit: int = Field(
        default=DEFAULT_FEE_SAMPLE_LIMIT,
        ge=0,
        le=DEFAULT_FEE_SAMPLE_LIMIT,
        validation_alias="ZKLENSE_FEE_SAMPLE_LIMIT",
    )

    web_app_url: str = Field(default=DEFAULT_WEB_APP_URL, validation_alias="ZKLENSE_WEB_APP_URL")
    viewer_host: str = Field(default="127.0.0.1", validation_alias="ZKLENSE_VIEWER_HOST")

    log_level: str = Field(default="WARNING", validation_alias="ZKLENSE_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = [
    "DEFAULT_COMPUTE_UNIT_LIMIT",
    "DEFAULT_FEE_SAMPLE_LIMIT",
    "DEFAULT_WEB_APP_URL",
    "MAX_COMPUTE_UNIT_LIMIT",
    "MAX_COMPUTE_UNIT_PRICE",
    "Settings",
    "get_settings",
]
