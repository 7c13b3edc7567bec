"""
User settings: location and home train station.

``Settings`` is an immutable, validated snapshot. ``SettingsStore`` owns the
current snapshot and is handed to every fetcher; fetchers read ``current``
once when they build a request, so an update never tears an in-flight read.

The persisted form is a flat key-value mapping::

    {"latitude": 51.386, "longitude": -3.338, "trainStationCode": "RIA"}
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

#: Used when no location has been configured (Rhoose, Vale of Glamorgan).
DEFAULT_LATITUDE = 51.38635735792241
DEFAULT_LONGITUDE = -3.3383067307875467
DEFAULT_STATION_CODE = "RIA"

# Flat key-value names
KEY_LATITUDE = "latitude"
KEY_LONGITUDE = "longitude"
KEY_STATION = "trainStationCode"


class Settings(BaseModel):
    """Validated user settings."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")

    latitude: float = Field(default=DEFAULT_LATITUDE, ge=-90, le=90)
    longitude: float = Field(default=DEFAULT_LONGITUDE, ge=-180, le=180)
    train_station_code: str = Field(default=DEFAULT_STATION_CODE, pattern=r"^[A-Z]{3}$")

    @field_validator("train_station_code", mode="before")
    @classmethod
    def _upper_station(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="before")
    @classmethod
    def _fallback_location(cls, data: Any) -> Any:
        # 0,0 means "never configured"
        if isinstance(data, dict):
            lat, lon = data.get("latitude"), data.get("longitude")
            # anything else is left for field validation to reject
            scalars = (int, float)
            if isinstance(lat, scalars) and isinstance(lon, scalars) and lat == 0 and lon == 0:
                data = {**data, "latitude": DEFAULT_LATITUDE, "longitude": DEFAULT_LONGITUDE}
        return data

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Settings:
        """Build from the flat key-value form. Missing keys use defaults."""
        fields: dict[str, Any] = {}
        if data.get(KEY_LATITUDE) is not None:
            fields["latitude"] = data[KEY_LATITUDE]
        if data.get(KEY_LONGITUDE) is not None:
            fields["longitude"] = data[KEY_LONGITUDE]
        if data.get(KEY_STATION):
            fields["train_station_code"] = data[KEY_STATION]
        return cls(**fields)

    def to_mapping(self) -> dict[str, Any]:
        """Flat key-value form for persistence."""
        return {
            KEY_LATITUDE: self.latitude,
            KEY_LONGITUDE: self.longitude,
            KEY_STATION: self.train_station_code,
        }


class SettingsStore:
    """Owns the current ``Settings`` and optionally persists them as JSON."""

    def __init__(self, settings: Settings | None = None, path: Path | None = None) -> None:
        self._lock = threading.Lock()
        self._settings = settings or Settings()
        self.path = path

    @classmethod
    def load(cls, path: Path) -> SettingsStore:
        """Load from a JSON file; a missing file gives defaults."""
        if not path.exists():
            return cls(path=path)
        with path.open() as f:
            data: dict[str, Any] = json.load(f)
        return cls(Settings.from_mapping(data), path=path)

    @property
    def current(self) -> Settings:
        """The current snapshot. Safe to read from any thread."""
        return self._settings

    def update(self, **changes: Any) -> Settings:
        """Validate and swap in new settings.

        Accepts field names or their flat persisted keys (``trainStationCode``).

        Raises:
            pydantic.ValidationError: A value is out of range or malformed,
                or a key is not a setting.
        """
        if KEY_STATION in changes:
            changes["train_station_code"] = changes.pop(KEY_STATION)
        with self._lock:
            merged = {**self._settings.model_dump(), **changes}
            updated = Settings.model_validate(merged)
            self._settings = updated
            if self.path is not None:
                self._save(updated)
        logger.info("Settings updated: %s", updated.to_mapping())
        return updated

    def _save(self, settings: Settings) -> None:
        assert self.path is not None
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w") as f:
            json.dump(settings.to_mapping(), f, indent=2)
