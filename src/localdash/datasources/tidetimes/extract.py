"""Field extraction from the tide-times page.

The page has no API, so fields are pulled out with regular expressions
tied to its exact markup. Everything markup-specific lives behind
``PageExtractor``; the tide and sun derivations only see the extracted
strings, so a structured HTML parser can replace ``RegexPageExtractor``
without touching them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from localdash.errors import ParseFailure

TIDE_ROW_PATTERN = re.compile(
    r"<td[^>]*>(High|Low)</td>\s*<td[^>]*><span>(\d{2}:\d{2})</span></td>\s*<td[^>]*>([\d.]+)m</td>"
)
SUNRISE_PATTERN = re.compile(r"Sunrise\s*:<span>(\d{2}:\d{2})</span>")
SUNSET_PATTERN = re.compile(r"Sunset\s*:<span>(\d{2}:\d{2})</span>")


def current_height_pattern(station: str) -> re.Pattern[str]:
    """``Right now, the water height at <station> is approximately 2.34m``."""
    return re.compile(rf"water height at {re.escape(station)} is approximately ([\d.]+)m")


@dataclass(frozen=True)
class TideRow:
    """Raw cells of one high/low water table row."""

    kind: str
    time: str
    height: str


class PageExtractor(Protocol):
    """Pulls raw fields out of a tide-times document."""

    def current_height(self, html: str, station: str) -> float: ...

    def tide_rows(self, html: str) -> list[TideRow]: ...

    def sun_times(self, html: str) -> tuple[str, str]: ...


class RegexPageExtractor:
    """Regex-based extraction matching the live page markup."""

    def current_height(self, html: str, station: str) -> float:
        """
        Current water height in metres.

        Raises:
            ParseFailure: The sentence is missing or the number is malformed.
        """
        match = current_height_pattern(station).search(html)
        if match is None:
            raise ParseFailure("current_height")
        try:
            return float(match.group(1))
        except ValueError as exc:
            raise ParseFailure("current_height") from exc

    def tide_rows(self, html: str) -> list[TideRow]:
        """Every ``High``/``Low`` row in document order. May be empty."""
        return [TideRow(*m.groups()) for m in TIDE_ROW_PATTERN.finditer(html)]

    def sun_times(self, html: str) -> tuple[str, str]:
        """
        Sunrise and sunset as ``HH:MM``.

        Raises:
            ParseFailure: Either time is missing.
        """
        sunrise = SUNRISE_PATTERN.search(html)
        sunset = SUNSET_PATTERN.search(html)
        if sunrise is None or sunset is None:
            raise ParseFailure("sun_times")
        return sunrise.group(1), sunset.group(1)


#: Default extractor used by the tide and sun sources.
default_extractor = RegexPageExtractor()
