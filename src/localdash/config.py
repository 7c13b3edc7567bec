"""
Application configuration.

Endpoints, fixed locations and throttle windows live here so nothing in the
datasources hardcodes them. Values come from ``LOCALDASH_*`` environment
variables (or a ``.env`` file) via pydantic-settings.

User-editable values (coordinates, station code) are *not* configuration;
see :mod:`localdash.settings`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Process-wide application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOCALDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "LocalDash"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Local paths
    settings_path: Path = Path("localdash-settings.json")
    site_dir: Path = Path("site")
    http_port: int = 8000

    # Transport
    http_timeout: float = 30.0

    # API endpoints
    weather_api: str = "https://api.open-meteo.com"
    tide_page_url: str = "https://www.tidetimes.org.uk/barry-tide-times"
    trains_api: str = "https://huxley2.azurewebsites.net"
    geocode_api: str = "https://nominatim.openstreetmap.org"
    routing_api: str = "https://router.project-osrm.org"
    sports_api: str = "https://www.thesportsdb.com/api/v1/json/3"

    # Tide / sun page
    tide_station: str = "Barry"
    timezone: str = "Europe/London"

    # School run
    school_run_origin: str = "CF62 3ND"
    school_run_destination: str = "Gaer Primary School"
    school_run_ttl_seconds: int = 300

    # Football
    team_id: int = 133637
    team_name: str = "Cardiff City"
    team_keyword: str = "Cardiff"
    league_id: int = 4396
    league_name: str = "English League 1"
    league_label: str = "League 1"
    season: str = "2025-2026"
    first_round: int = 12
    last_round: int = 20
    sports_ttl_seconds: int = 3600

    # Trains
    departures_rows: int = Field(default=10, ge=1, le=150)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Return the cached application configuration."""
    return AppConfig()
