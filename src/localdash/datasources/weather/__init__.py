"""Open-Meteo weather data source.

Current temperature and conditions plus a "next rain" outlook from today's
hourly precipitation probabilities (free, no API key).

Public API:
  - forecast: fetch_current_weather, condition_for, find_next_rain, format_rain_eta
  - client: endpoint path and shared constants
"""

from localdash.datasources.weather.client import RAIN_PROBABILITY_THRESHOLD
from localdash.datasources.weather.forecast import (
    NO_RAIN_LABEL,
    HourlyPoint,
    build_forecast_params,
    condition_for,
    fetch_current_weather,
    find_next_rain,
    format_rain_eta,
    iter_hourly,
    parse_weather,
)

__all__ = [
    "NO_RAIN_LABEL",
    "RAIN_PROBABILITY_THRESHOLD",
    "HourlyPoint",
    "build_forecast_params",
    "condition_for",
    "fetch_current_weather",
    "find_next_rain",
    "format_rain_eta",
    "iter_hourly",
    "parse_weather",
]
