"""
Command-line interface for LocalDash.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import sys
import threading
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from localdash import __version__
from localdash.config import AppConfig, get_config
from localdash.dashboard import Dashboard
from localdash.flows.refresh import refresh_dashboard
from localdash.renderers.dashboard import build_dashboard_html, build_dashboard_text
from localdash.services.log import configure_logging
from localdash.settings import SettingsStore
from localdash.state import FetchState

DEFAULT_WATCH_INTERVAL = 300


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="localdash",
        description="Personal dashboard: weather, tide, trains, sunset, school run and football",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    show_parser = subparsers.add_parser("show", help="Fetch everything and print the dashboard")
    show_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for sources (default: twice http_timeout)",
    )

    refresh_parser = subparsers.add_parser("refresh", help="Fetch everything and write the site")
    refresh_parser.add_argument(
        "--site-dir",
        type=str,
        default=None,
        help="Output directory (default: site_dir from config)",
    )

    watch_parser = subparsers.add_parser(
        "watch", help="Refresh periodically and rewrite the site on every change"
    )
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_WATCH_INTERVAL,
        help=f"Seconds between refreshes (default: {DEFAULT_WATCH_INTERVAL})",
    )
    watch_parser.add_argument(
        "--count",
        type=int,
        default=0,
        help="Stop after this many refreshes (default: run until interrupted)",
    )
    watch_parser.add_argument("--site-dir", type=str, default=None)

    serve_parser = subparsers.add_parser("serve", help="Serve the site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: http_port from config)",
    )

    settings_parser = subparsers.add_parser("settings", help="Show or change user settings")
    settings_parser.add_argument("--latitude", type=float, default=None)
    settings_parser.add_argument("--longitude", type=float, default=None)
    settings_parser.add_argument(
        "--station",
        type=str,
        default=None,
        help="3-letter CRS station code, e.g. RIA for Rhoose",
    )

    return parser


def _build_dashboard(config: AppConfig) -> Dashboard:
    return Dashboard(SettingsStore.load(config.settings_path), config=config)


def _write_page(dash: Dashboard, site_dir: Path) -> Path:
    html = build_dashboard_html(
        dash.panels(), dash.clock(), title=dash.config.app_name, tz_name=dash.config.timezone
    )
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    output_path.write_text(html, encoding="utf-8")
    return output_path


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    config = get_config()
    settings = SettingsStore.load(config.settings_path).current
    print(f"Application: {config.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {config.app_env}")
    print(f"Debug: {config.debug}")
    print(f"Settings file: {config.settings_path}")
    print(f"Location: ({settings.latitude}, {settings.longitude})")
    print(f"Station: {settings.train_station_code}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handle the 'show' command: fetch all sources and print them."""
    config = get_config()
    dash = _build_dashboard(config)
    timeout = args.timeout if args.timeout is not None else config.http_timeout * 2
    try:
        dash.refresh()
        if not dash.wait(timeout=timeout):
            print("Warning: some sources did not finish in time.", file=sys.stderr)
        print(build_dashboard_text(dash.panels()), end="")
    finally:
        dash.close()
    failed = [name for name, state in dash.states().items() if state.is_failed]
    return 1 if len(failed) == len(dash.fetchers) else 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: run the refresh flow."""
    result = refresh_dashboard(site_dir=args.site_dir)
    if result["failed"]:
        print(f"Failed sources: {', '.join(result['failed'])}", file=sys.stderr)
    print(f"Done: {result['output']}")
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Handle the 'watch' command: refresh on a timer, rewrite on every change."""
    config = get_config()
    site_dir = Path(args.site_dir) if args.site_dir else config.site_dir
    dash = _build_dashboard(config)
    write_lock = threading.Lock()

    def on_change(name: str, state: FetchState[Any]) -> None:
        if not state.is_terminal:
            return
        with write_lock:
            path = _write_page(dash, site_dir)
        print(f"{name}: {state.phase} -> {path}")

    unsubscribe = dash.subscribe(on_change)
    rounds = 0
    try:
        while True:
            dash.refresh()
            rounds += 1
            if args.count and rounds >= args.count:
                dash.wait(timeout=config.http_timeout * 2)
                break
            time.sleep(args.interval)
    except KeyboardInterrupt:
        print("\nStopped.")
    finally:
        unsubscribe()
        dash.close()
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the site directory locally."""
    config = get_config()
    port = args.port if args.port is not None else config.http_port
    site_dir = config.site_dir

    if not site_dir.exists():
        print("No site directory found. Run 'localdash refresh' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def cmd_settings(args: argparse.Namespace) -> int:
    """Handle the 'settings' command: print, and optionally update, user settings."""
    config = get_config()
    store = SettingsStore.load(config.settings_path)

    changes: dict[str, Any] = {}
    if args.latitude is not None:
        changes["latitude"] = args.latitude
    if args.longitude is not None:
        changes["longitude"] = args.longitude
    if args.station is not None:
        changes["train_station_code"] = args.station

    if changes:
        try:
            store.update(**changes)
        except ValidationError as exc:
            print(f"Invalid settings: {exc.error_count()} error(s)", file=sys.stderr)
            for error in exc.errors():
                field = ".".join(str(loc) for loc in error["loc"]) or "settings"
                print(f"  {field}: {error['msg']}", file=sys.stderr)
            return 1

    current = store.current
    print(f"Latitude: {current.latitude}")
    print(f"Longitude: {current.longitude}")
    print(f"Station: {current.train_station_code}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    config = get_config()
    configure_logging("DEBUG" if args.debug or config.debug else config.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "show": cmd_show,
        "refresh": cmd_refresh,
        "watch": cmd_watch,
        "serve": cmd_serve,
        "settings": cmd_settings,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
