"""
ModWatch Configuration Module.

Centralizes all configuration settings using Pydantic Settings.
Requires Python 3.11+.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file into os.environ at module import time
# This ensures nested BaseSettings classes can read the values
_env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    # Try current working directory
    load_dotenv()


def normalize_extension(value: str) -> str:
    """
    Normalize a file extension to the `.ext` form.

    Raises:
        ValueError: If the extension is empty
    """
    value = value.strip()
    if not value:
        raise ValueError("extension must not be empty")
    return value if value.startswith(".") else f".{value}"


class WatcherSettings(BaseSettings):
    """Mod search directory configuration settings."""

    model_config = SettingsConfigDict(env_prefix="WATCHER_")

    marker_extension: str = Field(default=".info", description="Mod metadata file extension")
    fallback_extension: str = Field(
        default=".dll",
        description="Package binary extension used when no metadata files exist",
    )
    poll_interval_ms: int = Field(
        default=0,
        ge=0,
        le=600_000,
        description="Automatic refresh interval, 0 disables polling",
    )

    @field_validator("marker_extension", "fallback_extension", mode="before")
    @classmethod
    def check_extension(cls, v: str) -> str:
        """Ensure extensions carry a leading dot."""
        return normalize_extension(v)


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    format: str = Field(default="json")  # "json" or "console"
    file_path: Path | None = Field(default=None)


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="ModWatch")
    app_version: str = Field(default="0.1.0")
    environment: str = Field(default="development")

    # Sub-settings
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance of Settings so every watcher shares
    the same defaults.
    """
    return Settings()
