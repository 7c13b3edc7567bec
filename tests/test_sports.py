"""Tests for the TheSportsDB football datasource."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import Mock
from zoneinfo import ZoneInfo

import pytest
import requests

from localdash.datasources.sports import (
    NO_RECENT_RESULT,
    NO_UPCOMING_FIXTURE,
    POSITION_UNKNOWN,
    League,
    Team,
    fetch_fixture_summary,
    fetch_last_result,
    fetch_league_position,
    fetch_next_fixture,
    format_event_date,
    is_upcoming,
    last_result_line,
    league_position_line,
    ordinal,
)
from localdash.errors import DecodeFailure, NoDataAvailable, TransportFailure

TEAM = Team()
LEAGUE = League()
LONDON = ZoneInfo("Europe/London")
NOW = datetime(2025, 10, 18, 10, 0, tzinfo=UTC)


def _event(home: str, away: str, day: str, **extra: Any) -> dict[str, Any]:
    return {
        "strHomeTeam": home,
        "strAwayTeam": away,
        "dateEvent": day,
        "strLeague": LEAGUE.name,
        **extra,
    }


def _json(body: Any) -> Mock:
    resp = Mock()
    resp.json.return_value = body
    return resp


class TestOrdinal:
    @pytest.mark.parametrize(
        ("n", "expected"),
        [
            (1, "1st"),
            (2, "2nd"),
            (3, "3rd"),
            (4, "4th"),
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (23, "23rd"),
            (24, "24th"),
        ],
    )
    def test_ordinal(self, n: int, expected: str) -> None:
        assert ordinal(n) == expected


class TestFormatEventDate:
    def test_reorders(self) -> None:
        assert format_event_date("2025-10-11") == "11/10/2025"

    def test_passthrough(self) -> None:
        assert format_event_date("TBC") == "TBC"


class TestLastResult:
    def test_away_win_scored_from_team_side(self) -> None:
        results = [
            _event(
                "Wigan Athletic", "Cardiff City", "2025-10-11", intHomeScore="1", intAwayScore="2"
            )
        ]
        assert last_result_line(results, TEAM, LEAGUE) == (
            "Previous Fixture (11/10/2025):\nCardiff City 2-1 Wigan Athletic"
        )

    def test_home_game(self) -> None:
        results = [
            _event("Cardiff City", "Reading", "2025-10-04", intHomeScore="0", intAwayScore="0")
        ]
        assert last_result_line(results, TEAM, LEAGUE).endswith("Cardiff City 0-0 Reading")

    def test_missing_scores_are_zero(self) -> None:
        results = [_event("Cardiff City", "Reading", "2025-10-04", intHomeScore=None)]
        assert last_result_line(results, TEAM, LEAGUE).endswith("Cardiff City 0-0 Reading")

    def test_only_league_matches_count(self) -> None:
        cup = _event("Cardiff City", "Newport County", "2025-10-14", strLeague="EFL Trophy")
        league = _event("Cardiff City", "Reading", "2025-10-11", intHomeScore="3", intAwayScore="1")
        assert "Reading" in last_result_line([cup, league], TEAM, LEAGUE)

    def test_none(self) -> None:
        with pytest.raises(NoDataAvailable, match=NO_RECENT_RESULT):
            last_result_line([], TEAM, LEAGUE)

    def test_fetch_reports_none_as_text(self) -> None:
        http = Mock()
        http.get.return_value = _json({"results": None})
        assert fetch_last_result(TEAM, LEAGUE, http=http) == NO_RECENT_RESULT


class TestIsUpcoming:
    def test_today_counts(self) -> None:
        assert is_upcoming(_event("Cardiff City", "Reading", "2025-10-18"), TEAM, NOW, LONDON)

    def test_yesterday_is_past(self) -> None:
        assert not is_upcoming(_event("Cardiff City", "Reading", "2025-10-17"), TEAM, NOW, LONDON)

    def test_postponed(self) -> None:
        event = _event("Cardiff City", "Reading", "2025-10-25", strPostponed="yes")
        assert not is_upcoming(event, TEAM, NOW, LONDON)

    def test_other_teams(self) -> None:
        assert not is_upcoming(_event("Reading", "Wigan Athletic", "2025-10-25"), TEAM, NOW, LONDON)

    def test_bad_date(self) -> None:
        assert not is_upcoming(_event("Cardiff City", "Reading", ""), TEAM, NOW, LONDON)


class TestNextFixture:
    def test_searches_rounds_in_order(self) -> None:
        rounds = {
            "12": [_event("Cardiff City", "Reading", "2025-10-11")],
            "13": None,
            "14": [
                _event("Reading", "Wigan Athletic", "2025-10-25"),
                _event("Bolton Wanderers", "Cardiff City", "2025-10-25"),
            ],
        }
        seen: list[str] = []

        def get(url: str, params: dict[str, Any]) -> Mock:
            seen.append(str(params["r"]))
            return _json({"events": rounds[str(params["r"])]})

        http = Mock()
        http.get.side_effect = get
        league = League(first_round=12, last_round=15)

        line = fetch_next_fixture(TEAM, league, http=http, now=NOW, tz=LONDON)

        assert line == "Next Fixture (25/10/2025):\nCardiff City v Bolton Wanderers"
        assert seen == ["12", "13", "14"]
        assert http.get.call_args.kwargs["params"]["s"] == "2025-2026"

    def test_nothing_found(self) -> None:
        http = Mock()
        http.get.return_value = _json({"events": None})
        league = League(first_round=1, last_round=2)
        assert fetch_next_fixture(TEAM, league, http=http, now=NOW) == NO_UPCOMING_FIXTURE
        assert http.get.call_count == 2


class TestLeaguePosition:
    def test_position(self) -> None:
        table = [
            {"strTeam": "Bolton Wanderers", "intRank": "1"},
            {"strTeam": "Cardiff City", "intRank": "2"},
        ]
        assert league_position_line(table, TEAM, LEAGUE) == "2nd in League 1"

    def test_not_listed(self) -> None:
        with pytest.raises(NoDataAvailable):
            league_position_line([{"strTeam": "Reading", "intRank": "5"}], TEAM, LEAGUE)

    def test_fetch_reports_unknown_as_text(self) -> None:
        http = Mock()
        http.get.return_value = _json({"table": [{"strTeam": "Cardiff City", "intRank": "n/a"}]})
        assert fetch_league_position(TEAM, LEAGUE, http=http) == POSITION_UNKNOWN


class TestFixtureSummary:
    """All three lookups run together; any failure fails the whole summary."""

    def _http(self, *, table_error: Exception | None = None) -> Mock:
        def get(url: str, params: dict[str, Any]) -> Mock:
            if url.endswith("/eventslast.php"):
                return _json(
                    {
                        "results": [
                            _event(
                                "Cardiff City",
                                "Reading",
                                "2025-10-11",
                                intHomeScore="2",
                                intAwayScore="1",
                            )
                        ]
                    }
                )
            if url.endswith("/eventsround.php"):
                return _json({"events": [_event("Cardiff City", "Wigan Athletic", "2025-10-25")]})
            if url.endswith("/lookuptable.php"):
                if table_error is not None:
                    raise table_error
                return _json({"table": [{"strTeam": "Cardiff City", "intRank": "3"}]})
            raise AssertionError(f"unexpected url {url}")

        http = Mock()
        http.get.side_effect = get
        return http

    def test_combined(self) -> None:
        summary = fetch_fixture_summary(http=self._http(), now=NOW)
        assert summary.league_position == "3rd in League 1"
        assert summary.last_result_line == (
            "Previous Fixture (11/10/2025):\nCardiff City 2-1 Reading"
        )
        assert summary.next_fixture_line == (
            "Next Fixture (25/10/2025):\nCardiff City v Wigan Athletic"
        )

    def test_one_failure_fails_all(self) -> None:
        http = self._http(table_error=requests.ConnectionError("table down"))
        with pytest.raises(TransportFailure, match="table down"):
            fetch_fixture_summary(http=http, now=NOW)

    def test_malformed_body(self) -> None:
        http = Mock()
        http.get.return_value = _json(["not", "an", "object"])
        with pytest.raises(DecodeFailure):
            fetch_fixture_summary(http=http, now=NOW)
