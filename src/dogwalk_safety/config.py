"""
Application settings.

Values come from environment variables prefixed ``DOGWALK_`` or a local
``.env`` file, e.g.::

    DOGWALK_OPENWEATHER_API_KEY=...
    DOGWALK_LAT=33.45
    DOGWALK_LON=-112.07
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the CLI and the acquisition chain."""

    model_config = SettingsConfigDict(
        env_prefix="DOGWALK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "dogwalk-safety"
    app_env: str = "development"
    debug: bool = False

    # OpenWeatherMap current-weather API
    openweather_api_key: str = ""

    # Device location. Coordinates, when both set, act as a granted location.
    lat: float | None = Field(default=None, ge=-90, le=90)
    lon: float | None = Field(default=None, ge=-180, le=180)
    use_ip_location: bool = False

    # Per-attempt deadlines, in seconds
    location_timeout: float = 20.0
    http_timeout: float = 10.0

    allow_synthetic: bool = True

    data_dir: Path = Path.home() / ".dogwalk-safety"

    @property
    def settings_file(self) -> Path:
        """Key-value file holding the walk log."""
        return self.data_dir / "settings.json"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
