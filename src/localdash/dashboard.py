"""
The dashboard: every fetcher, wired to one settings store, session and cache.

Usage::

    dash = Dashboard(SettingsStore.load(Path("localdash-settings.json")))
    dash.subscribe(lambda name, state: print(name, state.phase))
    dash.refresh()
    dash.wait(timeout=30)
    print(build_dashboard_text(dash.panels()))
    dash.close()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, wait
from datetime import datetime
from typing import TYPE_CHECKING, Any

from localdash.config import AppConfig, get_config
from localdash.fetchers import (
    Fetcher,
    SchoolRunFetcher,
    SportsFetcher,
    SunFetcher,
    TideFetcher,
    TrainFetcher,
    WeatherFetcher,
)
from localdash.renderers.panels import Panel, build_panels
from localdash.services.http import create_session
from localdash.settings import SettingsStore
from localdash.store import ResultStore, utc_now

if TYPE_CHECKING:
    import requests

    from localdash.state import FetchState

logger = logging.getLogger(__name__)

DashboardListener = Callable[[str, "FetchState[Any]"], None]


class Dashboard:
    """Owns the six source fetchers in display order."""

    def __init__(
        self,
        settings: SettingsStore | None = None,
        *,
        config: AppConfig | None = None,
        http: requests.Session | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.config = config or get_config()
        self.settings = settings or SettingsStore()
        self.http = http or create_session(timeout=self.config.http_timeout)
        self.clock = clock
        self.store = ResultStore(clock)

        kwargs: dict[str, Any] = {
            "config": self.config,
            "http": self.http,
            "store": self.store,
            "clock": clock,
        }
        self.weather = WeatherFetcher(self.settings, **kwargs)
        self.tide = TideFetcher(self.settings, **kwargs)
        self.sun = SunFetcher(self.settings, **kwargs)
        self.trains = TrainFetcher(self.settings, **kwargs)
        self.school_run = SchoolRunFetcher(self.settings, **kwargs)
        self.football = SportsFetcher(self.settings, **kwargs)

    @property
    def fetchers(self) -> dict[str, Fetcher[Any]]:
        """Fetchers by name, in layout order (top row, then bottom row)."""
        ordered: list[Fetcher[Any]] = [
            self.weather,
            self.tide,
            self.sun,
            self.trains,
            self.school_run,
            self.football,
        ]
        return {f.name: f for f in ordered}

    def get(self, name: str) -> Fetcher[Any]:
        try:
            return self.fetchers[name]
        except KeyError:
            raise KeyError(f"Unknown source: {name}") from None

    def subscribe(self, listener: DashboardListener) -> Callable[[], None]:
        """Listen to every source. The listener gets ``(name, state)``."""
        unsubscribers = [
            fetcher.subscribe(lambda state, name=name: listener(name, state))
            for name, fetcher in self.fetchers.items()
        ]

        def _unsubscribe() -> None:
            for unsub in unsubscribers:
                unsub()

        return _unsubscribe

    def refresh(self, *, force: bool = False) -> list[Future[Any]]:
        """Trigger every source. ``force`` drops throttled caches first."""
        futures: list[Future[Any]] = []
        for fetcher in self.fetchers.values():
            if force:
                fetcher.invalidate()
            future = fetcher.trigger_fetch()
            if future is not None:
                futures.append(future)
        logger.info("Refresh started %d of %d sources", len(futures), len(self.fetchers))
        return futures

    def wait(self, futures: list[Future[Any]] | None = None, timeout: float | None = None) -> bool:
        """Block until the given (or all in-flight) fetches finish.

        Returns False if the timeout expired first.
        """
        if futures is None:
            futures = [f for f in (fx.inflight for fx in self.fetchers.values()) if f]
        _done, pending = wait(futures, timeout=timeout)
        return not pending

    def states(self) -> dict[str, FetchState[Any]]:
        return {name: f.current_state() for name, f in self.fetchers.items()}

    def panels(self) -> list[Panel]:
        """Presentation view-models for the current states."""
        return build_panels(self.states(), self.config)

    def close(self) -> None:
        for fetcher in self.fetchers.values():
            fetcher.close()
