"""Whole-dashboard renderers: the HTML page and the terminal view."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from zoneinfo import ZoneInfo

from localdash.renderers import render_template
from localdash.renderers.panels import Panel

#: Panels per grid row.
COLUMNS = 3


def format_updated(updated: datetime, tz_name: str = "Europe/London") -> str:
    """``2025-10-18 07:45`` in local time."""
    return updated.astimezone(ZoneInfo(tz_name)).strftime("%Y-%m-%d %H:%M")


def grid_rows(panels: Sequence[Panel], columns: int = COLUMNS) -> list[list[Panel]]:
    """Split panels into rows, in order."""
    return [list(panels[i : i + columns]) for i in range(0, len(panels), columns)]


def build_dashboard_html(
    panels: Sequence[Panel],
    updated: datetime,
    *,
    title: str = "LocalDash",
    tz_name: str = "Europe/London",
) -> str:
    """Full HTML page with the panels laid out in a fixed grid."""
    return render_template(
        "dashboard.html.j2",
        title=title,
        updated=format_updated(updated, tz_name),
        rows=grid_rows(panels),
    )


def build_dashboard_text(panels: Sequence[Panel]) -> str:
    """Plain-text rendering: one block per panel, blank line between."""
    blocks: list[str] = []
    for panel in panels:
        header = f"{panel.icon} {panel.title}".strip()
        body: list[str]
        if panel.loading:
            body = ["Loading..."]
        elif panel.error_line is not None:
            body = [panel.error_line]
        else:
            body = [line for text in panel.lines for line in text.splitlines()]
        blocks.append("\n".join([header, *(f"  {line}" for line in body)]))
    return "\n\n".join(blocks) + "\n"
