"""League position, last result and next fixture for the tracked team."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from localdash.datasources.sports.client import (
    DEFAULT_API,
    LAST_EVENTS_PATH,
    ROUND_EVENTS_PATH,
    TABLE_PATH,
    League,
    Team,
)
from localdash.errors import DecodeFailure, NoDataAvailable
from localdash.schemas import FixtureSummary
from localdash.services.http import get_json, session

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)

NO_RECENT_RESULT = "No recent result"
NO_UPCOMING_FIXTURE = "No upcoming fixture"
POSITION_UNKNOWN = "Position unknown"

#: A fixture dated yesterday still counts until a day has passed since its date.
FIXTURE_GRACE = timedelta(days=1)


# =============================================================================
# Formatting
# =============================================================================


def ordinal(n: int) -> str:
    """1 -> ``1st``, 2 -> ``2nd``, 11 -> ``11th``, 21 -> ``21st``."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_event_date(date_str: str) -> str:
    """``2025-10-18`` -> ``18/10/2025``. Anything else is returned unchanged."""
    parts = date_str.split("-")
    if len(parts) != 3:
        return date_str
    year, month, day = parts
    return f"{day}/{month}/{year}"


def _score(value: Any) -> str:
    return "0" if value is None or value == "" else str(value)


def _involves(event: dict[str, Any], team: Team) -> bool:
    home = event.get("strHomeTeam") or ""
    away = event.get("strAwayTeam") or ""
    return team.keyword in home or team.keyword in away


def _opponent(event: dict[str, Any], team: Team) -> tuple[bool, str]:
    home = event.get("strHomeTeam") or ""
    away = event.get("strAwayTeam") or ""
    is_home = team.keyword in home
    return is_home, away if is_home else home


def _events(data: Any, key: str) -> list[dict[str, Any]]:
    """The list under ``key``; TheSportsDB sends ``null`` when there is none."""
    if not isinstance(data, dict):
        raise DecodeFailure(f"Unexpected sports response: expected an object with {key!r}")
    items = data.get(key) or []
    if not isinstance(items, list):
        raise DecodeFailure(f"Unexpected sports response: {key!r} is not a list")
    return [item for item in items if isinstance(item, dict)]


# =============================================================================
# Last result
# =============================================================================


def last_result_line(results: list[dict[str, Any]], team: Team, league: League) -> str:
    """
    Most recent league match, scored from the tracked team's side.

    Raises:
        NoDataAvailable: No league match among the recent results.
    """
    event = next((e for e in results if e.get("strLeague") == league.name), None)
    if event is None:
        raise NoDataAvailable(NO_RECENT_RESULT)

    is_home, opponent = _opponent(event, team)
    home_score = _score(event.get("intHomeScore"))
    away_score = _score(event.get("intAwayScore"))
    score = f"{home_score}-{away_score}" if is_home else f"{away_score}-{home_score}"
    when = format_event_date(event.get("dateEvent") or "")
    return f"Previous Fixture ({when}):\n{team.name} {score} {opponent}"


def fetch_last_result(
    team: Team,
    league: League,
    *,
    base_url: str = DEFAULT_API,
    http: requests.Session = session,
) -> str:
    """Fetch the team's recent events and describe the last league result."""
    data = get_json(http, base_url.rstrip("/") + LAST_EVENTS_PATH, {"id": team.id})
    try:
        return last_result_line(_events(data, "results"), team, league)
    except NoDataAvailable as exc:
        return exc.message


# =============================================================================
# Next fixture
# =============================================================================


def is_upcoming(event: dict[str, Any], team: Team, now: datetime, tz: tzinfo) -> bool:
    """
    The team plays, the match isn't postponed, and it isn't already past.

    "Past" allows a day's grace so a fixture later today (or one that
    kicked off a few hours ago) still shows.
    """
    if not _involves(event, team):
        return False
    if (event.get("strPostponed") or "no") == "yes":
        return False
    try:
        match_day = date.fromisoformat(event.get("dateEvent") or "")
    except ValueError:
        return False
    return datetime.combine(match_day, time(), tzinfo=tz) + FIXTURE_GRACE > now


def next_fixture_line(event: dict[str, Any], team: Team) -> str:
    _is_home, opponent = _opponent(event, team)
    when = format_event_date(event.get("dateEvent") or "")
    return f"Next Fixture ({when}):\n{team.name} v {opponent}"


def fetch_next_fixture(
    team: Team,
    league: League,
    *,
    base_url: str = DEFAULT_API,
    http: requests.Session = session,
    now: datetime | None = None,
    tz: tzinfo = UTC,
) -> str:
    """
    Search rounds in order and describe the first upcoming fixture.

    Stops at the first round with a match; rounds with no events are skipped.
    """
    now = now or datetime.now(UTC)
    url = base_url.rstrip("/") + ROUND_EVENTS_PATH
    for round_number in league.rounds:
        params = {"id": league.id, "r": round_number, "s": league.season}
        events = _events(get_json(http, url, params), "events")
        match = next((e for e in events if is_upcoming(e, team, now, tz)), None)
        if match is not None:
            logger.debug("Next fixture found in round %d", round_number)
            return next_fixture_line(match, team)
    logger.debug("No upcoming fixture in rounds %s", league.rounds)
    return NO_UPCOMING_FIXTURE


# =============================================================================
# League table
# =============================================================================


def league_position_line(table: list[dict[str, Any]], team: Team, league: League) -> str:
    """
    ``3rd in League 1``.

    Raises:
        NoDataAvailable: The team isn't listed or its rank is unreadable.
    """
    for row in table:
        name = row.get("strTeam") or ""
        rank = row.get("intRank")
        if team.keyword in name and rank is not None:
            try:
                return f"{ordinal(int(rank))} in {league.label}"
            except ValueError:
                break
    raise NoDataAvailable(POSITION_UNKNOWN)


def fetch_league_position(
    team: Team,
    league: League,
    *,
    base_url: str = DEFAULT_API,
    http: requests.Session = session,
) -> str:
    params = {"l": league.id, "s": league.season}
    data = get_json(http, base_url.rstrip("/") + TABLE_PATH, params)
    try:
        return league_position_line(_events(data, "table"), team, league)
    except NoDataAvailable as exc:
        return exc.message


# =============================================================================
# Combined
# =============================================================================


def fetch_fixture_summary(
    team: Team | None = None,
    league: League | None = None,
    *,
    base_url: str = DEFAULT_API,
    http: requests.Session = session,
    now: datetime | None = None,
    tz_name: str = "Europe/London",
) -> FixtureSummary:
    """
    Run the three sub-fetches concurrently and combine them.

    All three must succeed; the first failure is raised and the other
    results are dropped.

    Args:
        team: Tracked team (defaults to Cardiff City).
        league: League to report on (defaults to League One 2025-26).
        base_url: TheSportsDB base URL including the API key segment.
        http: Session to use.
        now: Reference time for "upcoming" (defaults to the current time).
        tz_name: Timezone fixture dates are given in.
    """
    team = team or Team()
    league = league or League()
    now = now or datetime.now(UTC)
    tz = ZoneInfo(tz_name)

    jobs: dict[str, Callable[[], str]] = {
        "last": lambda: fetch_last_result(team, league, base_url=base_url, http=http),
        "next": lambda: fetch_next_fixture(
            team, league, base_url=base_url, http=http, now=now, tz=tz
        ),
        "table": lambda: fetch_league_position(team, league, base_url=base_url, http=http),
    }

    with ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix="sports") as pool:
        futures = {name: pool.submit(job) for name, job in jobs.items()}
        done, _pending = wait(futures.values(), return_when=FIRST_EXCEPTION)
        for future in done:
            exc = future.exception()
            if exc is not None:
                raise exc
        results = {name: future.result() for name, future in futures.items()}

    return FixtureSummary(
        league_position=results["table"],
        last_result_line=results["last"],
        next_fixture_line=results["next"],
    )
