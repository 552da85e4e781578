"""Application configuration utilities."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables.

    No cal.com credential lives here; each request forwards its own key in
    the ``X-Cal-Api-Key`` header.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = Field(
        default="Cal Voice Bridge",
    )
    app_version: str = Field(
        default="0.1.0",
    )
    log_level: str = Field(
        default="INFO",
    )

    cal_api_base_url: str = Field(
        default="https://api.cal.com/v2",
    )
    cal_api_version: str = Field(
        default="2024-08-13",
    )
    cal_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
    )
    cal_bookings_page_size: int = Field(
        default=100,
        gt=0,
    )
    cal_default_timezone: str = Field(
        default="UTC",
    )
    cal_cancel_subsequent_bookings: bool = Field(
        default=False,
    )
    default_cancellation_reason: str = Field(
        default="User requested cancellation via Voice AI",
    )
    placeholder_email_domain: str = Field(
        default="calpalworker.com",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
