"""Tests for the Open-Meteo weather datasource."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import Any
from unittest.mock import Mock

import pytest

from localdash.datasources.weather import (
    NO_RAIN_LABEL,
    HourlyPoint,
    condition_for,
    fetch_current_weather,
    find_next_rain,
    format_rain_eta,
    iter_hourly,
    parse_weather,
)
from localdash.errors import DecodeFailure
from localdash.schemas import WeatherCondition

NOW = datetime(2025, 10, 18, 10, 30, tzinfo=UTC)


def _forecast(
    probabilities: list[int | None],
    *,
    start: str = "2025-10-18T00:00",
    temperature: float = 12.34,
    code: int = 2,
    offset: int = 0,
) -> dict[str, Any]:
    first = datetime.fromisoformat(start)
    times = [
        (first + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(len(probabilities))
    ]
    return {
        "utc_offset_seconds": offset,
        "current": {"temperature_2m": temperature, "weather_code": code},
        "hourly": {
            "time": times,
            "precipitation_probability": probabilities,
            "precipitation": [0.0] * len(probabilities),
        },
    }


class TestConditionFor:
    """WMO codes map onto condition buckets."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (0, WeatherCondition.CLEAR_SKY),
            (1, WeatherCondition.PARTLY_CLOUDY),
            (2, WeatherCondition.PARTLY_CLOUDY),
            (3, WeatherCondition.CLOUDY),
            (45, WeatherCondition.FOG),
            (48, WeatherCondition.FOG),
            (51, WeatherCondition.RAIN),
            (61, WeatherCondition.RAIN),
            (81, WeatherCondition.RAIN),
            (65, WeatherCondition.HEAVY_RAIN),
            (82, WeatherCondition.HEAVY_RAIN),
            (71, WeatherCondition.SNOW),
            (86, WeatherCondition.SNOW),
            (95, WeatherCondition.THUNDERSTORM),
            (99, WeatherCondition.THUNDERSTORM),
        ],
    )
    def test_known_codes(self, code: int, expected: WeatherCondition) -> None:
        assert condition_for(code) is expected

    @pytest.mark.parametrize("code", [4, 100, -1])
    def test_unknown_codes_are_cloudy(self, code: int) -> None:
        assert condition_for(code) is WeatherCondition.CLOUDY


class TestFormatRainEta:
    def test_minutes_only(self) -> None:
        assert format_rain_eta(NOW + timedelta(minutes=30), NOW) == "In 30min"

    def test_hours_and_minutes(self) -> None:
        assert format_rain_eta(NOW + timedelta(hours=2, minutes=5), NOW) == "In 2h 5min"

    def test_six_hours_or_more_uses_clock_time(self) -> None:
        when = datetime(2025, 10, 18, 18, 0, tzinfo=timezone(timedelta(hours=1)))
        assert format_rain_eta(when, NOW) == "At 18:00"


class TestFindNextRain:
    def test_first_hour_over_threshold(self) -> None:
        points = list(iter_hourly(_forecast([0] * 11 + [20, 40, 80])["hourly"]))
        rain = find_next_rain(points, NOW)
        assert rain is not None
        assert rain.eta == "In 1h 30min"
        assert rain.chance_percent == 40

    def test_threshold_is_exclusive(self) -> None:
        points = list(iter_hourly(_forecast([0] * 11 + [30, 30])["hourly"]))
        assert find_next_rain(points, NOW) is None

    def test_past_hours_ignored(self) -> None:
        """A rainy hour that has already started doesn't count."""
        points = list(iter_hourly(_forecast([0] * 10 + [90, 0, 0])["hourly"]))
        assert find_next_rain(points, NOW) is None

    def test_missing_probabilities_skipped(self) -> None:
        points = [
            HourlyPoint(NOW + timedelta(minutes=30), None, None),
            HourlyPoint(NOW + timedelta(minutes=90), 55, 1.2),
        ]
        rain = find_next_rain(points, NOW)
        assert rain is not None
        assert rain.chance_percent == 55

    def test_stops_at_first_match(self) -> None:
        def points() -> Any:
            yield HourlyPoint(NOW + timedelta(minutes=30), 60, None)
            raise AssertionError("iterated past first match")

        assert find_next_rain(points(), NOW) is not None


class TestIterHourly:
    def test_naive_times_use_given_zone(self) -> None:
        bst = timezone(timedelta(hours=1))
        hourly = {"time": ["2025-10-18T12:00"], "precipitation_probability": [5]}
        (point,) = iter_hourly(hourly, bst)
        assert point.time == datetime(2025, 10, 18, 11, 0, tzinfo=UTC)

    def test_bad_times_skipped(self) -> None:
        points = list(iter_hourly({"time": ["garbage", "2025-10-18T12:00"]}))
        assert len(points) == 1
        assert points[0].probability is None


class TestParseWeather:
    def test_snapshot(self) -> None:
        snap = parse_weather(_forecast([0] * 11 + [45], code=61), NOW)
        assert snap.temperature_c == pytest.approx(12.34)
        assert snap.condition is WeatherCondition.RAIN
        assert snap.next_rain_eta == "In 30min"
        assert snap.next_rain_chance_percent == 45

    def test_no_rain(self) -> None:
        snap = parse_weather(_forecast([0] * 24), NOW)
        assert snap.next_rain_eta == NO_RAIN_LABEL
        assert snap.next_rain_chance_percent == 0

    def test_local_offset_applied(self) -> None:
        """Hourly times are local wall-clock times at the forecast location."""
        data = _forecast([0] * 12 + [70], offset=3600)
        snap = parse_weather(data, NOW)
        # 12:00 local = 11:00 UTC, half an hour after NOW
        assert snap.next_rain_eta == "In 30min"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"current": {}, "hourly": {}},
            {"current": {"temperature_2m": "warm", "weather_code": 1}, "hourly": {}},
            {"current": {"temperature_2m": 1, "weather_code": 1}, "hourly": []},
        ],
    )
    def test_malformed_raises_decode_failure(self, data: dict[str, Any]) -> None:
        with pytest.raises(DecodeFailure):
            parse_weather(data, NOW)


class TestFetchCurrentWeather:
    def test_requests_forecast(self) -> None:
        http = Mock()
        http.get.return_value.json.return_value = _forecast([0] * 24)

        snap = fetch_current_weather(51.38, -3.33, http=http, now=NOW)

        assert snap.condition is WeatherCondition.PARTLY_CLOUDY
        url = http.get.call_args.args[0]
        params = http.get.call_args.kwargs["params"]
        assert url == "https://api.open-meteo.com/v1/forecast"
        assert params["latitude"] == 51.38
        assert params["longitude"] == -3.33
        assert params["current"] == "temperature_2m,weather_code"
        assert params["hourly"] == "precipitation_probability,precipitation"
        assert params["timezone"] == "auto"
        assert params["forecast_days"] == 1

    def test_non_object_body(self) -> None:
        http = Mock()
        http.get.return_value.json.return_value = [1, 2]
        with pytest.raises(DecodeFailure):
            fetch_current_weather(51.38, -3.33, http=http, now=NOW)
