"""tidetimes.org.uk data source (tides and sun times).

One scraped HTML page feeds two dashboard panels. Markup-specific
extraction is isolated in ``extract``; ``tide`` and ``sun`` only derive.

Public API:
  - extract: PageExtractor, RegexPageExtractor, TideRow
  - tide: fetch_tide, parse_tide, tide_trend, to_events
  - sun: fetch_sun_times, parse_sun_times, next_sun_event
"""

from localdash.datasources.tidetimes.client import DEFAULT_PAGE_URL, fetch_page
from localdash.datasources.tidetimes.extract import (
    PageExtractor,
    RegexPageExtractor,
    TideRow,
    default_extractor,
)
from localdash.datasources.tidetimes.sun import (
    SUNSET_CUTOFF_HOUR,
    fetch_sun_times,
    next_sun_event,
    parse_sun_times,
)
from localdash.datasources.tidetimes.tide import fetch_tide, parse_tide, tide_trend, to_events

__all__ = [
    "DEFAULT_PAGE_URL",
    "SUNSET_CUTOFF_HOUR",
    "PageExtractor",
    "RegexPageExtractor",
    "TideRow",
    "default_extractor",
    "fetch_page",
    "fetch_sun_times",
    "fetch_tide",
    "next_sun_event",
    "parse_sun_times",
    "parse_tide",
    "tide_trend",
    "to_events",
]
