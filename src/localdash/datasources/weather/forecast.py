"""Current conditions and next-rain outlook from the Open-Meteo Forecast API."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING, Any

from localdash.datasources.weather.client import (
    CURRENT_VARS,
    FORECAST_PATH,
    HOURLY_VARS,
    RAIN_PROBABILITY_THRESHOLD,
)
from localdash.errors import DecodeFailure
from localdash.schemas import NextRain, WeatherCondition, WeatherSnapshot
from localdash.services.http import get_json, session

if TYPE_CHECKING:
    import requests

NO_RAIN_LABEL = "No rain expected"

# WMO weather interpretation codes -> condition bucket
_CONDITIONS: dict[int, WeatherCondition] = {
    0: WeatherCondition.CLEAR_SKY,
    1: WeatherCondition.PARTLY_CLOUDY,
    2: WeatherCondition.PARTLY_CLOUDY,
    3: WeatherCondition.CLOUDY,
    45: WeatherCondition.FOG,
    48: WeatherCondition.FOG,
    **dict.fromkeys((51, 53, 55, 56, 57, 61, 63, 80, 81), WeatherCondition.RAIN),
    **dict.fromkeys((65, 82), WeatherCondition.HEAVY_RAIN),
    **dict.fromkeys((71, 73, 75, 77, 85, 86), WeatherCondition.SNOW),
    **dict.fromkeys((95, 96, 99), WeatherCondition.THUNDERSTORM),
}


def condition_for(code: int) -> WeatherCondition:
    """Map a WMO weather code to a condition. Unknown codes count as cloudy."""
    return _CONDITIONS.get(code, WeatherCondition.CLOUDY)


# =============================================================================
# Next rain
# =============================================================================


@dataclass(frozen=True)
class HourlyPoint:
    """One hour of the precipitation forecast."""

    time: datetime
    probability: int | None
    precipitation_mm: float | None


def iter_hourly(hourly: dict[str, Any], tz: tzinfo = UTC) -> Iterator[HourlyPoint]:
    """
    Lazily walk the hourly arrays in time order.

    Open-Meteo returns local wall-clock times without an offset when
    ``timezone=auto``; those are interpreted in ``tz``. Unparseable
    timestamps are skipped.
    """
    times = hourly.get("time") or []
    probabilities = hourly.get("precipitation_probability") or []
    amounts = hourly.get("precipitation") or []

    for i, time_str in enumerate(times):
        try:
            when = datetime.fromisoformat(time_str)
        except (TypeError, ValueError):
            continue
        if when.tzinfo is None:
            when = when.replace(tzinfo=tz)
        yield HourlyPoint(
            time=when,
            probability=probabilities[i] if i < len(probabilities) else None,
            precipitation_mm=amounts[i] if i < len(amounts) else None,
        )


def format_rain_eta(when: datetime, now: datetime) -> str:
    """
    Relative label for an upcoming time.

    Under an hour -> ``In 25min``; under six hours -> ``In 2h 5min``;
    otherwise the wall-clock time at ``when`` -> ``At 18:00``.
    """
    seconds = (when - now).total_seconds()
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)

    if hours == 0:
        return f"In {minutes}min"
    if hours < 6:
        return f"In {hours}h {minutes}min"
    return f"At {when.strftime('%H:%M')}"


def find_next_rain(
    points: Iterable[HourlyPoint],
    now: datetime,
    threshold: int = RAIN_PROBABILITY_THRESHOLD,
) -> NextRain | None:
    """
    First hour strictly after ``now`` whose rain probability exceeds ``threshold``.

    Hours with no probability are skipped. Returns None if nothing qualifies.
    """
    for point in points:
        if point.time <= now or point.probability is None:
            continue
        if point.probability > threshold:
            return NextRain(
                eta=format_rain_eta(point.time, now),
                chance_percent=point.probability,
            )
    return None


# =============================================================================
# Fetch + decode
# =============================================================================


def build_forecast_params(lat: float, lon: float) -> dict[str, str | int | float]:
    """Query parameters for today's current + hourly forecast."""
    return {
        "latitude": lat,
        "longitude": lon,
        "current": CURRENT_VARS,
        "hourly": HOURLY_VARS,
        "timezone": "auto",
        "forecast_days": 1,
    }


def parse_weather(data: dict[str, Any], now: datetime) -> WeatherSnapshot:
    """
    Decode a forecast response into a snapshot.

    Raises:
        DecodeFailure: ``current`` or ``hourly`` is missing or malformed.
    """
    try:
        current = data["current"]
        temperature = float(current["temperature_2m"])
        code = int(current["weather_code"])
        hourly = data["hourly"]
        if not isinstance(hourly, dict):
            raise TypeError("hourly is not an object")
        offset = int(data.get("utc_offset_seconds") or 0)
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodeFailure(f"Unexpected forecast response: {exc}") from exc

    tz = timezone(timedelta(seconds=offset))
    next_rain = find_next_rain(iter_hourly(hourly, tz), now)

    return WeatherSnapshot(
        temperature_c=temperature,
        condition=condition_for(code),
        next_rain_eta=next_rain.eta if next_rain else NO_RAIN_LABEL,
        next_rain_chance_percent=next_rain.chance_percent if next_rain else 0,
    )


def fetch_current_weather(
    lat: float,
    lon: float,
    *,
    base_url: str = "https://api.open-meteo.com",
    http: requests.Session = session,
    now: datetime | None = None,
) -> WeatherSnapshot:
    """
    Fetch current conditions and the next-rain outlook.

    Args:
        lat: Latitude.
        lon: Longitude.
        base_url: Open-Meteo base URL.
        http: Session to use (defaults to the shared session).
        now: Reference time for "next rain" (defaults to the current time).

    Returns:
        WeatherSnapshot for the location.
    """
    data = get_json(http, base_url.rstrip("/") + FORECAST_PATH, build_forecast_params(lat, lon))
    if not isinstance(data, dict):
        raise DecodeFailure("Unexpected forecast response: not an object")
    return parse_weather(data, now or datetime.now(UTC))
