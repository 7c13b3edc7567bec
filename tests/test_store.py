"""Tests for the in-memory ResultStore."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from localdash.store import ResultStore

T0 = datetime(2025, 10, 18, 7, 30, tzinfo=UTC)


class FakeClock:
    """Settable clock for freshness tests."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class TestResultStoreWrite:
    """Test writing data with metadata envelopes."""

    def test_envelope_format(self) -> None:
        store = ResultStore(FakeClock())
        valid = T0 + timedelta(minutes=5)
        envelope = store.write("school_run", {"minutes": 12}, source="osrm", valid_until=valid)

        assert envelope["meta"]["source"] == "osrm"
        assert envelope["meta"]["fetched_at"] == T0
        assert envelope["meta"]["valid_until"] == valid
        assert envelope["data"] == {"minutes": 12}

    def test_extra_params(self) -> None:
        store = ResultStore(FakeClock())
        store.write("weather", {}, source="test", location={"lat": 51.4, "lon": -3.3})
        raw = store.read_raw("weather")
        assert raw is not None
        assert raw["meta"]["location"] == {"lat": 51.4, "lon": -3.3}

    def test_no_valid_until(self) -> None:
        store = ResultStore(FakeClock())
        store.write("weather", {}, source="test")
        raw = store.read_raw("weather")
        assert raw is not None
        assert "valid_until" not in raw["meta"]

    def test_overwrite_replaces(self) -> None:
        store = ResultStore(FakeClock())
        store.write("k", 1, source="test")
        store.write("k", 2, source="test")
        assert store.read("k") == 2


class TestResultStoreRead:
    def test_read_returns_payload(self) -> None:
        store = ResultStore(FakeClock())
        store.write("k", {"key": "value"}, source="test")
        assert store.read("k") == {"key": "value"}

    def test_read_missing(self) -> None:
        store = ResultStore(FakeClock())
        assert store.read("nope") is None
        assert store.read_raw("nope") is None

    def test_invalidate(self) -> None:
        store = ResultStore(FakeClock())
        store.write("k", 1, source="test", valid_until=T0 + timedelta(hours=1))
        store.invalidate("k")
        assert store.read("k") is None
        assert not store.is_fresh("k")

    def test_invalidate_missing_is_noop(self) -> None:
        ResultStore(FakeClock()).invalidate("nope")


class TestResultStoreFreshness:
    """Test TTL-based freshness checks."""

    def test_fresh_before_expiry(self) -> None:
        clock = FakeClock()
        store = ResultStore(clock)
        store.write("k", 1, source="test", valid_until=T0 + timedelta(minutes=5))
        clock.advance(minutes=4, seconds=59)
        assert store.is_fresh("k")

    def test_fresh_at_exact_expiry(self) -> None:
        clock = FakeClock()
        store = ResultStore(clock)
        store.write("k", 1, source="test", valid_until=T0 + timedelta(minutes=5))
        clock.advance(minutes=5)
        assert store.is_fresh("k")

    def test_stale_after_expiry(self) -> None:
        clock = FakeClock()
        store = ResultStore(clock)
        store.write("k", 1, source="test", valid_until=T0 + timedelta(minutes=5))
        clock.advance(minutes=5, seconds=1)
        assert not store.is_fresh("k")

    def test_no_valid_until_is_never_fresh(self) -> None:
        store = ResultStore(FakeClock())
        store.write("k", 1, source="test")
        assert not store.is_fresh("k")

    def test_missing_is_not_fresh(self) -> None:
        assert not ResultStore(FakeClock()).is_fresh("k")

    def test_naive_expiry_treated_as_utc(self) -> None:
        clock = FakeClock()
        store = ResultStore(clock)
        store.write("k", 1, source="test", valid_until=datetime(2025, 10, 18, 8, 0))
        assert store.is_fresh("k")
