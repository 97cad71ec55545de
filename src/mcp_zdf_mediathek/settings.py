from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Callable
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import configure_logging, get_logger

log = get_logger("mcp.zdf.settings")

# Placeholder credentials shipped in sample configs; never valid against the API.
PLACEHOLDER_CLIENT_ID = "mediathek-search"
PLACEHOLDER_CLIENT_SECRET = "ZDFmediathekSearchClientSecret"

Clock = Callable[[], datetime]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # upstream API
    ZDF_URL: str = Field(default="https://prod-api.zdf.de")
    ZDF_TOKEN_PATH: str = Field(default="/oauth/token")
    ZDF_CLIENT_ID: str = Field(default="")
    ZDF_CLIENT_SECRET: str = Field(default="")

    # HTTP client
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    # "now" for currently-airing lookups
    TIMEZONE: str = Field(default="Europe/Berlin")

    # logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False)

    @property
    def base_url(self) -> str:
        return self.ZDF_URL.rstrip("/")

    @property
    def token_url(self) -> str:
        return f"{self.base_url}/{self.ZDF_TOKEN_PATH.lstrip('/')}"

    def clock(self) -> Clock:
        tz = ZoneInfo(self.TIMEZONE)
        return lambda: datetime.now(tz)

    def validate_credentials(self) -> None:
        """Fail fast when the OAuth2 client credentials are missing or placeholders."""
        log.info("Validating required environment variables")
        errors: list[str] = []
        if not self.ZDF_CLIENT_ID.strip() or self.ZDF_CLIENT_ID == PLACEHOLDER_CLIENT_ID:
            errors.append(
                "ZDF_CLIENT_ID is not configured or using default value. "
                "Please set a valid client ID from https://developer.zdf.de/limited-access"
            )
        if not self.ZDF_CLIENT_SECRET.strip() or self.ZDF_CLIENT_SECRET == PLACEHOLDER_CLIENT_SECRET:
            errors.append(
                "ZDF_CLIENT_SECRET is not configured or using default value. "
                "Please set a valid client secret from https://developer.zdf.de/limited-access"
            )
        if errors:
            for e in errors:
                log.error("Environment validation failed", problem=e)
            raise RuntimeError(
                "Required environment variables are not configured:\n"
                + "\n".join(errors)
                + "\nPlease set ZDF_CLIENT_ID and ZDF_CLIENT_SECRET environment variables."
            )
        log.info("Environment validation successful", zdf_url=self.base_url)


@lru_cache
def get_settings() -> Settings:
    """Load settings once and apply the configured log level."""
    settings = Settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    return settings
