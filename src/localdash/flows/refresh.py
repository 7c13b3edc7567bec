"""
Prefect flow that refreshes every source and writes the dashboard page.

Sources are fetched through the shared ``Dashboard``, so throttled sources
(school run, football) are served from cache when still fresh.

Run locally:
    python -m localdash.flows.refresh

Run with Prefect dashboard:
    prefect server start &
    python -m localdash.flows.refresh
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from localdash.config import get_config
from localdash.dashboard import Dashboard
from localdash.renderers.dashboard import build_dashboard_html
from localdash.settings import SettingsStore

# Built on first use so importing the flow doesn't read settings or start workers
dashboard: Dashboard | None = None


def get_dashboard() -> Dashboard:
    global dashboard
    if dashboard is None:
        config = get_config()
        dashboard = Dashboard(SettingsStore.load(config.settings_path), config=config)
    return dashboard


# =============================================================================
# Tasks
# =============================================================================


@task(name="refresh-source")
def refresh_source(name: str, timeout: float | None = None) -> dict[str, Any]:
    """Fetch one source (or reuse its fresh cache) and summarize the outcome."""
    dash = get_dashboard()
    timeout = timeout if timeout is not None else dash.config.http_timeout * 2
    state = dash.get(name).fetch(timeout)
    error = state.error
    if state.is_loading:
        error = f"No response after {timeout:g}s"
    return {
        "name": name,
        "phase": str(state.phase),
        "error": error,
        "fetched_at": state.fetched_at.isoformat() if state.fetched_at else None,
    }


@task(name="build-html")
def build_html() -> str:
    """Render the dashboard page from the current fetch states."""
    dash = get_dashboard()
    return build_dashboard_html(
        dash.panels(),
        dash.clock(),
        title=dash.config.app_name,
        tz_name=dash.config.timezone,
    )


@task(name="write-site")
def write_site(html: str, site_dir: str) -> Path:
    """Write HTML to the site directory."""
    out_dir = Path(site_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / "index.html"
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


# =============================================================================
# Flow
# =============================================================================


@flow(name="refresh-dashboard", log_prints=True)
def refresh_dashboard(site_dir: str | None = None) -> dict[str, Any]:
    """
    Refresh all sources and write ``<site_dir>/index.html``.

    A failing source doesn't stop the flow; its panel shows the error and
    its name is listed under ``failed`` in the result. A source still loading
    when its task times out is listed under ``failed`` too and keeps running.
    """
    dash = get_dashboard()
    site_dir = site_dir or str(dash.config.site_dir)

    sources: dict[str, str] = {}
    failed: list[str] = []
    for name in dash.fetchers:
        print(f"Refreshing {name}...")
        summary = refresh_source(name)
        sources[name] = summary["phase"]
        if summary["error"] is not None:
            print(f"Warning: {name} failed: {summary['error']}")
            failed.append(name)

    print("Building HTML...")
    html = build_html()

    print("Writing site...")
    output_path = write_site(html, site_dir)

    print(f"Dashboard written: {output_path}")
    return {"sources": sources, "failed": failed, "output": str(output_path)}


if __name__ == "__main__":
    result = refresh_dashboard()
    print(f"Flow complete: {result}")
