"""
Domain models for LocalDash.

Frozen pydantic models for the values each source publishes. Datasources
normalize API responses and scraped pages to these; renderers only ever
see these.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class _Value(BaseModel):
    """Immutable value object."""

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Weather
# =============================================================================


class WeatherCondition(StrEnum):
    """Condition buckets for WMO weather codes."""

    CLEAR_SKY = "clear_sky"
    PARTLY_CLOUDY = "partly_cloudy"
    CLOUDY = "cloudy"
    RAIN = "rain"
    HEAVY_RAIN = "heavy_rain"
    THUNDERSTORM = "thunderstorm"
    SNOW = "snow"
    FOG = "fog"


class NextRain(_Value):
    """First upcoming hour likely to see rain."""

    eta: str
    chance_percent: int = Field(..., ge=0, le=100)


class WeatherSnapshot(_Value):
    """Current conditions plus the next-rain outlook."""

    temperature_c: float
    condition: WeatherCondition
    next_rain_eta: str | None = None
    next_rain_chance_percent: int | None = None


# =============================================================================
# Tides
# =============================================================================


class TideKind(StrEnum):
    HIGH = "High"
    LOW = "Low"


class TideTrend(StrEnum):
    RISING = "Rising"
    FALLING = "Falling"
    UNKNOWN = "Unknown"


class TideEvent(_Value):
    """A high or low water today. Only used to derive the trend."""

    kind: TideKind
    time: datetime
    height_m: float


class TideSnapshot(_Value):
    """Current water height and whether it is going up or down."""

    current_height_m: float
    trend: TideTrend
    station_name: str


# =============================================================================
# Trains
# =============================================================================


class Direction(StrEnum):
    CARDIFF_BOUND = "cardiff_bound"
    BRIDGEND_BOUND = "bridgend_bound"


class DepartureStatus(StrEnum):
    ON_TIME = "on_time"
    DELAYED = "delayed"
    CANCELLED = "cancelled"


class TrainDeparture(_Value):
    """Next departure in one direction."""

    direction: Direction
    destination_label: str
    scheduled_time: str
    status: DepartureStatus
    expected_time: str | None = None

    @property
    def status_label(self) -> str:
        if self.status is DepartureStatus.CANCELLED:
            return "Cancelled"
        if self.status is DepartureStatus.DELAYED:
            return f"Delayed ({self.expected_time})" if self.expected_time else "Delayed"
        return "On time"


# =============================================================================
# Sun
# =============================================================================


class SunEventKind(StrEnum):
    SUNRISE = "Sunrise"
    SUNSET = "Sunset"


class SunEvent(_Value):
    kind: SunEventKind
    time: str


class SunTimes(_Value):
    """Today's sunrise and sunset as ``HH:MM`` strings."""

    sunrise: str
    sunset: str
    next_event: SunEvent | None = None


# =============================================================================
# Routing
# =============================================================================


class RouteEstimate(_Value):
    """Expected driving time for the school run."""

    duration_seconds: float
    formatted_duration: str


# =============================================================================
# Football
# =============================================================================


class FixtureSummary(_Value):
    """League position, last result and next fixture for the tracked team."""

    league_position: str | None = None
    last_result_line: str | None = None
    next_fixture_line: str | None = None
