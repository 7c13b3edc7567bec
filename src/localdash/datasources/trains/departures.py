"""Next Cardiff-bound and Bridgend-bound departures."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from localdash.datasources.trains.client import (
    BRIDGEND_BOUND_TOWNS,
    CARDIFF_BOUND_TOWNS,
    DEFAULT_API,
    DEPARTURES_PATH,
)
from localdash.errors import DecodeFailure, InvalidRequest
from localdash.schemas import DepartureStatus, Direction, TrainDeparture
from localdash.services.http import get_json, session

if TYPE_CHECKING:
    import requests

_CRS = re.compile(r"^[A-Z]{3}$")

# (direction, keywords, label), in output order
_DIRECTIONS: tuple[tuple[Direction, tuple[str, ...], str], ...] = (
    (Direction.CARDIFF_BOUND, CARDIFF_BOUND_TOWNS, "Cardiff"),
    (Direction.BRIDGEND_BOUND, BRIDGEND_BOUND_TOWNS, "Bridgend"),
)


def departure_status(
    std: str, etd: str, is_cancelled: bool
) -> tuple[DepartureStatus, str | None]:
    """
    Status and (if known) expected time for a service.

    ``etd`` is Darwin's estimate: ``On time``, ``Delayed``, ``Cancelled`` or
    an ``HH:MM`` time.
    """
    if is_cancelled:
        return DepartureStatus.CANCELLED, None
    if etd == "On time":
        return DepartureStatus.ON_TIME, None
    if etd == "Delayed":
        return DepartureStatus.DELAYED, None
    if etd != std:
        return DepartureStatus.DELAYED, etd
    return DepartureStatus.ON_TIME, None


def classify_direction(
    destination: str, taken: set[Direction] | None = None
) -> Direction | None:
    """
    Direction a destination belongs to, or None.

    Directions in ``taken`` are already filled and are not matched again.
    """
    taken = taken or set()
    for direction, towns, _label in _DIRECTIONS:
        if direction in taken:
            continue
        if any(town in destination for town in towns):
            return direction
    return None


def select_departures(services: list[dict[str, Any]]) -> list[TrainDeparture]:
    """
    First service per direction, Cardiff-bound first.

    Services are assumed to be in departure order. Scanning stops once both
    directions have a match. Services without a destination, ``std`` or
    ``etd`` are ignored.
    """
    found: dict[Direction, TrainDeparture] = {}

    for service in services:
        destinations = service.get("destination") or []
        std = service.get("std")
        etd = service.get("etd")
        if not destinations or not std or not etd:
            continue
        first = destinations[0]
        name = first.get("locationName") if isinstance(first, dict) else None
        if not name:
            continue

        direction = classify_direction(name, set(found))
        if direction is None:
            continue

        status, expected = departure_status(std, etd, bool(service.get("isCancelled")))
        label = next(lbl for d, _towns, lbl in _DIRECTIONS if d is direction)
        found[direction] = TrainDeparture(
            direction=direction,
            destination_label=label,
            scheduled_time=std,
            status=status,
            expected_time=expected,
        )
        if len(found) == len(_DIRECTIONS):
            break

    return [found[d] for d, _towns, _label in _DIRECTIONS if d in found]


def fetch_departures(
    station_code: str,
    *,
    rows: int = 10,
    base_url: str = DEFAULT_API,
    http: requests.Session = session,
) -> list[TrainDeparture]:
    """
    Fetch the next departures from a station and pick one per direction.

    Args:
        station_code: 3-letter CRS code (case-insensitive).
        rows: Number of upcoming services to request.
        base_url: Huxley base URL.
        http: Session to use.

    Returns:
        Zero, one or two departures, Cardiff-bound before Bridgend-bound.
    """
    station = station_code.strip().upper()
    if not _CRS.match(station):
        raise InvalidRequest(f"Invalid station code: {station_code!r}")

    url = base_url.rstrip("/") + DEPARTURES_PATH.format(station=station, rows=rows)
    data = get_json(http, url)
    if not isinstance(data, dict):
        raise DecodeFailure("Unexpected departures response: not an object")

    services = data.get("trainServices") or []
    if not isinstance(services, list):
        raise DecodeFailure("Unexpected departures response: trainServices is not a list")
    return select_departures([s for s in services if isinstance(s, dict)])
