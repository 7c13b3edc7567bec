"""Sunrise and sunset from the tide-times page."""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from localdash.datasources.tidetimes.client import DEFAULT_PAGE_URL, fetch_page
from localdash.datasources.tidetimes.extract import PageExtractor, default_extractor
from localdash.schemas import SunEvent, SunEventKind, SunTimes
from localdash.services.http import session

if TYPE_CHECKING:
    import requests

#: Local hour from which the next event shown is tomorrow's sunrise.
SUNSET_CUTOFF_HOUR = 18


def next_sun_event(sunrise: str, sunset: str, now: datetime, tz: tzinfo) -> SunEvent:
    """
    Sunset before 18:00 local time, sunrise from 18:00 on.

    This is a fixed-hour approximation; it does not check whether today's
    sunset has already happened.
    """
    if now.astimezone(tz).hour < SUNSET_CUTOFF_HOUR:
        return SunEvent(kind=SunEventKind.SUNSET, time=sunset)
    return SunEvent(kind=SunEventKind.SUNRISE, time=sunrise)


def parse_sun_times(
    html: str, now: datetime, tz: tzinfo, extractor: PageExtractor = default_extractor
) -> SunTimes:
    """
    Extract sunrise/sunset and pick the next event.

    Raises:
        ParseFailure: Either time is missing from the page.
    """
    sunrise, sunset = extractor.sun_times(html)
    return SunTimes(
        sunrise=sunrise,
        sunset=sunset,
        next_event=next_sun_event(sunrise, sunset, now, tz),
    )


def fetch_sun_times(
    *,
    url: str = DEFAULT_PAGE_URL,
    tz_name: str = "Europe/London",
    http: requests.Session = session,
    now: datetime | None = None,
    extractor: PageExtractor = default_extractor,
) -> SunTimes:
    """Fetch the page and return today's sun times."""
    html = fetch_page(url, http=http)
    return parse_sun_times(html, now or datetime.now(UTC), ZoneInfo(tz_name), extractor)
