import logging
from typing import Optional

from pydantic import Field, HttpUrl, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Backend Configuration
    api_base_url: HttpUrl = Field(
        "https://reactandspringbootbackend-production.up.railway.app",
        description="Base URL of the team REST backend.",
    )
    page_size: int = Field(6, ge=1, description="Number of teams per page.")

    # HTTP Client Configuration
    request_timeout: Optional[float] = Field(
        None,
        gt=0,
        description="Request timeout in seconds. Unset keeps the httpx default.",
    )
    max_attempts: int = Field(
        1,  # No retry unless configured
        ge=1,
        description="Total attempts for a request failing with a transport error.",
    )
    retry_backoff: float = Field(
        1.0,
        ge=0,
        description="Exponential backoff multiplier between attempts, in seconds.",
    )

    # View Behaviour
    discard_stale_loads: bool = Field(
        False,
        description="Ignore page responses that arrive after a newer load was issued.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )
    log_file: Optional[str] = Field(
        None, description="Optional path of a rotating log file."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_prefix="TEAM_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def base_url(self) -> str:
        """Base URL as a plain string without the trailing slash."""
        return str(self.api_base_url).rstrip("/")


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_settings() -> AppSettings:
    """Loads the dashboard settings, normalising the log level."""
    try:
        settings = AppSettings()
    except ValidationError as e:
        logging.error(f"Invalid TEAM_DASHBOARD_* configuration: {e}")
        raise SystemExit("Failed to load dashboard settings. Exiting.")

    level = settings.log_level.upper()
    if level not in VALID_LOG_LEVELS:
        logging.warning(
            f"Invalid TEAM_DASHBOARD_LOG_LEVEL '{settings.log_level}', falling back to INFO."
        )
        level = "INFO"
    settings.log_level = level
    return settings


settings: AppSettings = load_settings()
