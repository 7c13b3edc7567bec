"""Weather condition labels for renderers.

Pure lookups with no external dependencies.
"""

from __future__ import annotations

from localdash.schemas import WeatherCondition

CONDITION_DESCRIPTIONS: dict[WeatherCondition, str] = {
    WeatherCondition.CLEAR_SKY: "Clear sky",
    WeatherCondition.PARTLY_CLOUDY: "Partly cloudy",
    WeatherCondition.CLOUDY: "Cloudy",
    WeatherCondition.RAIN: "Rain",
    WeatherCondition.HEAVY_RAIN: "Heavy rain",
    WeatherCondition.THUNDERSTORM: "Thunderstorm",
    WeatherCondition.SNOW: "Snow",
    WeatherCondition.FOG: "Foggy",
}

CONDITION_ICONS: dict[WeatherCondition, str] = {
    WeatherCondition.CLEAR_SKY: "☀️",
    WeatherCondition.PARTLY_CLOUDY: "⛅",
    WeatherCondition.CLOUDY: "☁️",
    WeatherCondition.RAIN: "\U0001f327️",
    WeatherCondition.HEAVY_RAIN: "\U0001f327️",
    WeatherCondition.THUNDERSTORM: "⛈️",
    WeatherCondition.SNOW: "\U0001f328️",
    WeatherCondition.FOG: "\U0001f32b️",
}


def condition_description(condition: WeatherCondition) -> str:
    """Human-readable label, e.g. ``Partly cloudy``."""
    return CONDITION_DESCRIPTIONS[condition]


def condition_icon(condition: WeatherCondition) -> str:
    return CONDITION_ICONS[condition]
