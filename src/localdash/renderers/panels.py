"""Panel view-models: one per source, built from its current ``FetchState``.

A panel is what every front end (HTML page, terminal) draws for a source:
a title, an icon, and a few lines of text. While loading the lines are
empty; on failure the panel carries ``Error: <message>`` instead.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from localdash.renderers.weather_utils import condition_description, condition_icon
from localdash.schemas import (
    DepartureStatus,
    FixtureSummary,
    RouteEstimate,
    SunEventKind,
    SunTimes,
    TideSnapshot,
    TideTrend,
    TrainDeparture,
    WeatherSnapshot,
)

if TYPE_CHECKING:
    from localdash.config import AppConfig
    from localdash.state import FetchState


@dataclass(frozen=True)
class Panel:
    name: str
    title: str
    icon: str = ""
    lines: list[str] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    fetched_at: datetime | None = None
    #: Lines to flag (cancelled trains), by index into ``lines``.
    alerts: frozenset[int] = frozenset()

    @property
    def error_line(self) -> str | None:
        return f"Error: {self.error}" if self.error is not None else None


def _shell(name: str, title: str, icon: str, state: FetchState[Any]) -> Panel | None:
    """The panel for non-success states, or None when there is a value to show."""
    if state.is_loading:
        return Panel(name=name, title=title, icon=icon, loading=True)
    if state.is_failed:
        return Panel(name=name, title=title, icon=icon, error=state.error or "Unknown error")
    if state.value is None:
        return Panel(name=name, title=title, icon=icon)
    return None


# =============================================================================
# Per-source panels
# =============================================================================


def weather_panel(state: FetchState[WeatherSnapshot]) -> Panel:
    empty = _shell("weather", "Weather", "\U0001f324️", state)
    if empty is not None:
        return empty
    snap = state.value
    assert snap is not None

    lines = [f"{snap.temperature_c:.1f}°C", condition_description(snap.condition)]
    if snap.next_rain_eta is not None:
        lines.append(f"Next rain: {snap.next_rain_eta}")
    if snap.next_rain_chance_percent is not None:
        lines.append(f"Chance: {snap.next_rain_chance_percent}%")
    return Panel(
        name="weather",
        title="Weather",
        icon=condition_icon(snap.condition),
        lines=lines,
        fetched_at=state.fetched_at,
    )


_TREND_ARROWS = {TideTrend.RISING: "↑", TideTrend.FALLING: "↓", TideTrend.UNKNOWN: "?"}


def tide_panel(state: FetchState[TideSnapshot]) -> Panel:
    empty = _shell("tide", "Tide", "\U0001f30a", state)
    if empty is not None:
        return empty
    snap = state.value
    assert snap is not None
    return Panel(
        name="tide",
        title="Tide",
        icon="\U0001f30a",
        lines=[
            f"{snap.current_height_m:.1f}m",
            f"{_TREND_ARROWS[snap.trend]} {snap.trend.value}",
            snap.station_name,
        ],
        fetched_at=state.fetched_at,
    )


def sun_panel(state: FetchState[SunTimes]) -> Panel:
    empty = _shell("sun", "Sunset", "\U0001f307", state)
    if empty is not None:
        return empty
    sun = state.value
    assert sun is not None

    icon = "\U0001f307"
    if sun.next_event is not None and sun.next_event.kind is SunEventKind.SUNRISE:
        icon = "\U0001f305"
    return Panel(
        name="sun",
        title="Sunset",
        icon=icon,
        lines=[f"Sunset: {sun.sunset}", f"Sunrise: {sun.sunrise}"],
        fetched_at=state.fetched_at,
    )


def train_panel(state: FetchState[list[TrainDeparture]]) -> Panel:
    empty = _shell("trains", "Trains", "\U0001f686", state)
    if empty is not None:
        return empty
    departures = state.value or []

    lines: list[str] = []
    alerts: set[int] = set()
    for dep in departures:
        if dep.status is DepartureStatus.CANCELLED:
            alerts.add(len(lines))
        lines.append(f"{dep.destination_label} {dep.scheduled_time} {dep.status_label}")
    if not lines:
        lines.append("No departures")
    return Panel(
        name="trains",
        title="Trains",
        icon="\U0001f686",
        lines=lines,
        fetched_at=state.fetched_at,
        alerts=frozenset(alerts),
    )


def school_run_panel(state: FetchState[RouteEstimate], destination: str = "Gaer Primary") -> Panel:
    empty = _shell("school_run", "School Run", "\U0001f697", state)
    if empty is not None:
        return empty
    route = state.value
    assert route is not None
    return Panel(
        name="school_run",
        title="School Run",
        icon="\U0001f697",
        lines=[route.formatted_duration, f"Journey time to {destination}"],
        fetched_at=state.fetched_at,
    )


def football_panel(state: FetchState[FixtureSummary], team_name: str = "Cardiff City") -> Panel:
    empty = _shell("football", team_name, "⚽", state)
    if empty is not None:
        return empty
    summary = state.value
    assert summary is not None

    lines = [
        line
        for line in (
            summary.league_position,
            summary.last_result_line,
            summary.next_fixture_line,
        )
        if line
    ]
    return Panel(
        name="football",
        title=team_name,
        icon="⚽",
        lines=lines,
        fetched_at=state.fetched_at,
    )


# =============================================================================
# All panels
# =============================================================================


def _short_destination(destination: str) -> str:
    """``Gaer Primary School`` -> ``Gaer Primary``."""
    return destination.removesuffix(" School")


def build_panels(states: Mapping[str, FetchState[Any]], config: AppConfig) -> list[Panel]:
    """Panels in the order ``states`` lists the sources. Unknown names are skipped."""
    builders: dict[str, Callable[[FetchState[Any]], Panel]] = {
        "weather": weather_panel,
        "tide": tide_panel,
        "sun": sun_panel,
        "trains": train_panel,
        "school_run": lambda s: school_run_panel(
            s, _short_destination(config.school_run_destination)
        ),
        "football": lambda s: football_panel(s, config.team_name),
    }
    return [builders[name](state) for name, state in states.items() if name in builders]
