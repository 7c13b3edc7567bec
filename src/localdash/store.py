"""In-memory result store with freshness-aware caching.

Fetchers with a throttle window write their last good value here, wrapped
in a metadata envelope with ``valid_until``. Before hitting the network they
check ``is_fresh`` and reuse the stored value instead.

Nothing is persisted; a restart starts cold.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any


def utc_now() -> datetime:
    return datetime.now(UTC)


class ResultStore:
    """Keeps the latest value per key with TTL metadata."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, dict[str, Any]] = {}

    def read(self, key: str) -> Any | None:
        """Return the ``data`` payload, or None if nothing is stored."""
        envelope = self.read_raw(key)
        if envelope is None:
            return None
        return envelope["data"]

    def read_raw(self, key: str) -> dict[str, Any] | None:
        """Return the full envelope (meta + data)."""
        with self._lock:
            envelope = self._entries.get(key)
        return envelope

    def write(
        self,
        key: str,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> dict[str, Any]:
        """Store data wrapped in a metadata envelope.

        Args:
            key: Store key, normally the fetcher name.
            data: Payload to store under the ``data`` key.
            source: Data source identifier (e.g. ``"thesportsdb.com"``).
            valid_until: Expiry timestamp. None means never fresh.
            **params: Extra metadata fields.

        Returns:
            The stored envelope.
        """
        meta: dict[str, Any] = {"source": source, "fetched_at": self._clock()}
        if valid_until is not None:
            meta["valid_until"] = valid_until
        if params:
            meta.update(params)

        envelope = {"meta": meta, "data": data}
        with self._lock:
            self._entries[key] = envelope
        return envelope

    def invalidate(self, key: str) -> None:
        """Drop a stored entry so the next fetch goes to the network."""
        with self._lock:
            self._entries.pop(key, None)

    def is_fresh(self, key: str) -> bool:
        """Check if an entry exists and hasn't expired.

        Returns False if the entry is missing, has no ``valid_until``, or the
        expiry time has passed. An entry is still fresh at exactly
        ``valid_until``.
        """
        envelope = self.read_raw(key)
        if envelope is None:
            return False

        expiry: datetime | None = envelope["meta"].get("valid_until")
        if expiry is None:
            return False
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return self._clock() <= expiry
