"""Current tide height and trend from the tide-times page."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime, time, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from localdash.datasources.tidetimes.client import DEFAULT_PAGE_URL, fetch_page
from localdash.datasources.tidetimes.extract import PageExtractor, TideRow, default_extractor
from localdash.schemas import TideEvent, TideKind, TideSnapshot, TideTrend
from localdash.services.http import session

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)


def to_events(rows: Iterable[TideRow], today: date, tz: tzinfo) -> list[TideEvent]:
    """
    Combine raw table rows with today's date.

    Rows with an impossible time or height are skipped rather than failing
    the whole page.
    """
    events: list[TideEvent] = []
    for row in rows:
        try:
            wall = time.fromisoformat(row.time)
            height = float(row.height)
            kind = TideKind(row.kind)
        except ValueError:
            logger.debug("Skipping tide row %r", row)
            continue
        events.append(
            TideEvent(kind=kind, time=datetime.combine(today, wall, tzinfo=tz), height_m=height)
        )
    return events


def tide_trend(events: Iterable[TideEvent], now: datetime) -> TideTrend:
    """
    Rising if the next tide is high water, falling if it is low water.

    Unknown when no tide is left after ``now``.
    """
    for event in sorted(events, key=lambda e: e.time):
        if event.time > now:
            return TideTrend.RISING if event.kind is TideKind.HIGH else TideTrend.FALLING
    return TideTrend.UNKNOWN


def parse_tide(
    html: str,
    station: str,
    now: datetime,
    tz: tzinfo,
    extractor: PageExtractor = default_extractor,
) -> TideSnapshot:
    """
    Build a snapshot from the page.

    Raises:
        ParseFailure: The current height sentence is missing.
    """
    height = extractor.current_height(html, station)
    today = now.astimezone(tz).date()
    events = to_events(extractor.tide_rows(html), today, tz)
    return TideSnapshot(
        current_height_m=height,
        trend=tide_trend(events, now),
        station_name=station,
    )


def fetch_tide(
    *,
    url: str = DEFAULT_PAGE_URL,
    station: str = "Barry",
    tz_name: str = "Europe/London",
    http: requests.Session = session,
    now: datetime | None = None,
    extractor: PageExtractor = default_extractor,
) -> TideSnapshot:
    """
    Fetch the page and derive the current tide snapshot.

    Args:
        url: Tide-times page for the station.
        station: Town name as it appears in the page text.
        tz_name: Timezone the page's tide times are given in.
        http: Session to use.
        now: Reference time (defaults to the current time).
        extractor: Field extractor for the page markup.
    """
    html = fetch_page(url, http=http)
    return parse_tide(html, station, now or datetime.now(UTC), ZoneInfo(tz_name), extractor)
