"""TheSportsDB v1 API constants.

Docs: https://www.thesportsdb.com/free_sports_api (``3`` is the public test key).
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API = "https://www.thesportsdb.com/api/v1/json/3"

LAST_EVENTS_PATH = "/eventslast.php"
ROUND_EVENTS_PATH = "/eventsround.php"
TABLE_PATH = "/lookuptable.php"


@dataclass(frozen=True)
class Team:
    """The tracked team. ``keyword`` is matched inside event team names."""

    id: int = 133637
    name: str = "Cardiff City"
    keyword: str = "Cardiff"


@dataclass(frozen=True)
class League:
    """The league whose results, fixtures and table are shown."""

    id: int = 4396
    name: str = "English League 1"
    label: str = "League 1"
    season: str = "2025-2026"
    first_round: int = 12
    last_round: int = 20

    @property
    def rounds(self) -> range:
        return range(self.first_round, self.last_round + 1)
