"""
Per-source fetchers.

A ``Fetcher`` owns one data source end to end: it reads the current user
settings, calls the datasource, caches the result when the source has a
throttle window, and publishes every transition through its
``StateContainer``.

Fetches run on a single-worker executor per source, so a source never has
two network operations in flight. ``trigger_fetch()`` is fire-and-forget and
does nothing while the source is already loading or while a throttled
cached value is still fresh.

Architecture::

    trigger_fetch() -> cache fresh? -> begin() -> executor -> load(settings)
                                                                -> succeed() | fail()
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from localdash.config import AppConfig, get_config
from localdash.datasources.routing import estimate_drive_time
from localdash.datasources.sports import League, Team, fetch_fixture_summary
from localdash.datasources.tidetimes import fetch_sun_times, fetch_tide
from localdash.datasources.trains import fetch_departures
from localdash.datasources.weather import fetch_current_weather
from localdash.errors import FetchError
from localdash.schemas import (
    FixtureSummary,
    RouteEstimate,
    SunTimes,
    TideSnapshot,
    TrainDeparture,
    WeatherSnapshot,
)
from localdash.services.http import session
from localdash.state import FetchState, Listener, StateContainer
from localdash.store import ResultStore, utc_now

if TYPE_CHECKING:
    import requests

    from localdash.settings import Settings, SettingsStore

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Fetcher(ABC, Generic[T]):
    """Base class for all source fetchers.

    Subclasses set ``name``/``source`` and implement ``load()``, which runs
    on the worker thread and either returns a value or raises ``FetchError``.
    """

    name: ClassVar[str] = ""
    source: ClassVar[str] = ""

    def __init__(
        self,
        settings: SettingsStore,
        *,
        config: AppConfig | None = None,
        http: requests.Session | None = None,
        store: ResultStore | None = None,
        clock: Callable[[], datetime] = utc_now,
        executor: Executor | None = None,
    ) -> None:
        self.settings = settings
        self.config = config or get_config()
        self.http = http or session
        self.clock = clock
        self.store = store or ResultStore(clock)
        self._state: StateContainer[T] = StateContainer(self.name)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"fetch-{self.name}"
        )
        self._lock = threading.RLock()
        self._inflight: Future[FetchState[T]] | None = None
        self._closed = False

    # -- public surface -------------------------------------------------------

    @property
    def ttl(self) -> timedelta | None:
        """Throttle window; None means always refetch."""
        return None

    @property
    def closed(self) -> bool:
        return self._closed

    def current_state(self) -> FetchState[T]:
        return self._state.state

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Call ``listener`` on every state transition. Returns an unsubscriber."""
        return self._state.subscribe(listener)

    def trigger_fetch(self) -> Future[FetchState[T]] | None:
        """Start a fetch in the background.

        Returns the future for the new fetch, or None when nothing was
        started (closed, already loading, or cached value still fresh).
        """
        if self._closed:
            return None
        if self._serve_cached():
            return None
        with self._lock:
            if not self._state.begin():
                logger.debug("%s already loading, ignoring trigger", self.name)
                return None
            future = self._executor.submit(self._run)
            self._inflight = future
        return future

    @property
    def inflight(self) -> Future[FetchState[T]] | None:
        """The running fetch, or None when the source is not loading."""
        with self._lock:
            return self._inflight if self._state.state.is_loading else None

    def fetch(self, timeout: float | None = None) -> FetchState[T]:
        """Fetch (or join the fetch already running) and return its state.

        If ``timeout`` expires first the fetch keeps running in the background
        and the returned state is still loading.
        """
        future = self.trigger_fetch() or self.inflight
        if future is not None:
            try:
                future.result(timeout)
            except TimeoutError:
                logger.warning("%s still loading after %ss", self.name, timeout)
        return self.current_state()

    def invalidate(self) -> None:
        """Forget the cached value so the next trigger goes to the network."""
        self.store.invalidate(self.name)

    def close(self, wait: bool = False) -> None:
        """Tear down. Results that arrive afterwards are discarded."""
        self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=True)

    # -- subclass hook --------------------------------------------------------

    @abstractmethod
    def load(self, settings: Settings) -> T:
        """Fetch, decode and derive. Runs on the worker thread."""
        ...

    # -- internals ------------------------------------------------------------

    def _serve_cached(self) -> bool:
        if self.ttl is None or not self.store.is_fresh(self.name):
            return False
        if not self._state.state.is_success:
            envelope = self.store.read_raw(self.name)
            if envelope is None:
                return False
            self._state.restore(envelope["data"], envelope["meta"]["fetched_at"])
        logger.debug("%s cached value still fresh, skipping fetch", self.name)
        return True

    def _run(self) -> FetchState[T]:
        settings = self.settings.current
        try:
            value = self.load(settings)
        except FetchError as exc:
            logger.warning("%s fetch failed: %s", self.name, exc.message)
            self._finish_failed(exc.message, exc.kind)
        except Exception as exc:
            logger.exception("%s fetch raised unexpectedly", self.name)
            self._finish_failed(str(exc) or type(exc).__name__, "unexpected")
        else:
            self._finish_success(value)
        return self._state.state

    def _finish_success(self, value: T) -> None:
        if self._closed:
            logger.debug("%s closed, discarding result", self.name)
            return
        fetched_at = self.clock()
        ttl = self.ttl
        if ttl is not None:
            self.store.write(self.name, value, source=self.source, valid_until=fetched_at + ttl)
        self._state.succeed(value, fetched_at)

    def _finish_failed(self, message: str, kind: str) -> None:
        if self._closed:
            logger.debug("%s closed, discarding failure: %s", self.name, message)
            return
        self._state.fail(message, kind)


# =============================================================================
# Sources
# =============================================================================


class WeatherFetcher(Fetcher[WeatherSnapshot]):
    """Open-Meteo conditions for the configured location. Never cached."""

    name = "weather"
    source = "open-meteo.com"

    def load(self, settings: Settings) -> WeatherSnapshot:
        return fetch_current_weather(
            settings.latitude,
            settings.longitude,
            base_url=self.config.weather_api,
            http=self.http,
            now=self.clock(),
        )


class TideFetcher(Fetcher[TideSnapshot]):
    name = "tide"
    source = "tidetimes.org.uk"

    def load(self, settings: Settings) -> TideSnapshot:
        return fetch_tide(
            url=self.config.tide_page_url,
            station=self.config.tide_station,
            tz_name=self.config.timezone,
            http=self.http,
            now=self.clock(),
        )


class SunFetcher(Fetcher[SunTimes]):
    name = "sun"
    source = "tidetimes.org.uk"

    def load(self, settings: Settings) -> SunTimes:
        return fetch_sun_times(
            url=self.config.tide_page_url,
            tz_name=self.config.timezone,
            http=self.http,
            now=self.clock(),
        )


class TrainFetcher(Fetcher[list[TrainDeparture]]):
    """Next departure each way from the user's station."""

    name = "trains"
    source = "huxley2"

    def load(self, settings: Settings) -> list[TrainDeparture]:
        return fetch_departures(
            settings.train_station_code,
            rows=self.config.departures_rows,
            base_url=self.config.trains_api,
            http=self.http,
        )


class SchoolRunFetcher(Fetcher[RouteEstimate]):
    """Driving time for the fixed school run, cached for five minutes."""

    name = "school_run"
    source = "nominatim+osrm"

    @property
    def ttl(self) -> timedelta | None:
        return timedelta(seconds=self.config.school_run_ttl_seconds)

    def load(self, settings: Settings) -> RouteEstimate:
        return estimate_drive_time(
            self.config.school_run_origin,
            self.config.school_run_destination,
            geocode_url=self.config.geocode_api,
            routing_url=self.config.routing_api,
            http=self.http,
        )


class SportsFetcher(Fetcher[FixtureSummary]):
    """Football summary for the tracked team, cached for an hour."""

    name = "football"
    source = "thesportsdb.com"

    @property
    def ttl(self) -> timedelta | None:
        return timedelta(seconds=self.config.sports_ttl_seconds)

    def load(self, settings: Settings) -> FixtureSummary:
        cfg = self.config
        return fetch_fixture_summary(
            Team(id=cfg.team_id, name=cfg.team_name, keyword=cfg.team_keyword),
            League(
                id=cfg.league_id,
                name=cfg.league_name,
                label=cfg.league_label,
                season=cfg.season,
                first_round=cfg.first_round,
                last_round=cfg.last_round,
            ),
            base_url=cfg.sports_api,
            http=self.http,
            now=self.clock(),
            tz_name=cfg.timezone,
        )
