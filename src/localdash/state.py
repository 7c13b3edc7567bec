"""
Fetch state and the observable container that holds it.

Each fetcher owns exactly one ``StateContainer`` for its whole life. The
container only ever swaps immutable ``FetchState`` snapshots, so a reader
always sees one consistent state::

    idle -> loading -> success | failed -> loading -> ...

Subscribers are called after every transition with the new state. They run
on whichever thread made the transition (usually a fetch worker), so a UI
that needs its own thread should hand the state over, as an event bus would.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime  # noqa: TC003
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchState(Generic[T]):
    """Immutable snapshot of one source's freshness and result."""

    phase: Phase = Phase.IDLE
    value: T | None = None
    fetched_at: datetime | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def is_success(self) -> bool:
        return self.phase is Phase.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.phase is Phase.FAILED

    @property
    def is_terminal(self) -> bool:
        return self.phase in (Phase.SUCCESS, Phase.FAILED)

    @classmethod
    def idle(cls) -> FetchState[T]:
        return cls()

    @classmethod
    def loading(cls) -> FetchState[T]:
        return cls(phase=Phase.LOADING)

    @classmethod
    def success(cls, value: T, fetched_at: datetime) -> FetchState[T]:
        return cls(phase=Phase.SUCCESS, value=value, fetched_at=fetched_at)

    @classmethod
    def failed(cls, message: str, kind: str | None = None) -> FetchState[T]:
        return cls(phase=Phase.FAILED, error=message, error_kind=kind)


Listener = Callable[[FetchState[T]], None]


class StateContainer(Generic[T]):
    """Thread-safe holder of a ``FetchState`` with change notification."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._state: FetchState[T] = FetchState.idle()
        self._lock = threading.Lock()
        self._listeners: list[Listener[T]] = []

    @property
    def state(self) -> FetchState[T]:
        return self._state

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                self._listeners = [cb for cb in self._listeners if cb is not listener]

        return _unsubscribe

    def begin(self) -> bool:
        """Move to loading. Returns False (and does nothing) if already loading."""
        with self._lock:
            if self._state.is_loading:
                return False
            self._state = FetchState.loading()
        self._notify(self._state)
        return True

    def succeed(self, value: T, fetched_at: datetime) -> None:
        self._finish(FetchState.success(value, fetched_at))

    def fail(self, message: str, kind: str | None = None) -> None:
        self._finish(FetchState.failed(message, kind))

    def restore(self, value: T, fetched_at: datetime) -> None:
        """Publish a cached value as loading then success. Skipped while loading."""
        if self.begin():
            self.succeed(value, fetched_at)

    def _finish(self, state: FetchState[T]) -> None:
        with self._lock:
            if not self._state.is_loading:
                logger.debug("%s: ignoring %s outside loading", self.name, state.phase)
                return
            self._state = state
        self._notify(state)

    def _notify(self, state: FetchState[T]) -> None:
        logger.debug("%s -> %s", self.name, state.phase)
        with self._lock:
            listeners = list(self._listeners)
        for cb in listeners:
            try:
                cb(state)
            except Exception as exc:
                logger.error("State listener error [%s]: %s", self.name, exc)
