"""Football data source (TheSportsDB).

League position, last league result and next fixture for one team.

Public API:
  - client: Team, League, endpoint paths
  - fixtures: fetch_fixture_summary plus the three sub-fetches and formatters
"""

from localdash.datasources.sports.client import DEFAULT_API, League, Team
from localdash.datasources.sports.fixtures import (
    NO_RECENT_RESULT,
    NO_UPCOMING_FIXTURE,
    POSITION_UNKNOWN,
    fetch_fixture_summary,
    fetch_last_result,
    fetch_league_position,
    fetch_next_fixture,
    format_event_date,
    is_upcoming,
    last_result_line,
    league_position_line,
    next_fixture_line,
    ordinal,
)

__all__ = [
    "DEFAULT_API",
    "NO_RECENT_RESULT",
    "NO_UPCOMING_FIXTURE",
    "POSITION_UNKNOWN",
    "League",
    "Team",
    "fetch_fixture_summary",
    "fetch_last_result",
    "fetch_league_position",
    "fetch_next_fixture",
    "format_event_date",
    "is_upcoming",
    "last_result_line",
    "league_position_line",
    "next_fixture_line",
    "ordinal",
]
