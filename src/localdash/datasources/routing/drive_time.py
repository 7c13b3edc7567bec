"""Driving time between two addresses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from localdash.datasources.routing.client import (
    DEFAULT_GEOCODE_API,
    DEFAULT_ROUTING_API,
    ROUTE_PATH,
    SEARCH_PATH,
)
from localdash.errors import GeocodingFailed, NoRouteFound
from localdash.schemas import RouteEstimate
from localdash.services.http import get_json, session

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float

    def as_osrm(self) -> str:
        """OSRM wants ``lon,lat``."""
        return f"{self.lon},{self.lat}"


def format_duration(seconds: float) -> str:
    """
    ``1 hr 5 min`` for an hour or more, otherwise ``12 min``.

    Minutes are truncated, not rounded.
    """
    minutes = int(seconds // 60)
    hours, remaining = divmod(minutes, 60)
    if hours > 0:
        return f"{hours} hr {remaining} min"
    return f"{minutes} min"


def geocode(
    address: str,
    *,
    base_url: str = DEFAULT_GEOCODE_API,
    http: requests.Session = session,
) -> Coordinate:
    """
    Resolve an address to the best-matching coordinate.

    Raises:
        GeocodingFailed: No match, or the match has no usable coordinate.
    """
    params: dict[str, str | int] = {"q": address, "format": "jsonv2", "limit": 1}
    results = get_json(http, base_url.rstrip("/") + SEARCH_PATH, params)
    if not isinstance(results, list) or not results:
        raise GeocodingFailed(address)
    try:
        first: dict[str, Any] = results[0]
        return Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodingFailed(address) from exc


def route_duration(
    origin: Coordinate,
    destination: Coordinate,
    *,
    base_url: str = DEFAULT_ROUTING_API,
    http: requests.Session = session,
) -> float:
    """
    Expected driving time in seconds for the first route, no alternatives.

    Raises:
        NoRouteFound: The service found no route or answered with an error code.
    """
    path = ROUTE_PATH.format(origin=origin.as_osrm(), destination=destination.as_osrm())
    params = {"alternatives": "false", "overview": "false"}
    data = get_json(http, base_url.rstrip("/") + path, params)
    if not isinstance(data, dict) or data.get("code") != "Ok":
        code = data.get("code") if isinstance(data, dict) else None
        raise NoRouteFound(f"No route found ({code})" if code else "No route found")

    routes = data.get("routes") or []
    try:
        return float(routes[0]["duration"])
    except (IndexError, KeyError, TypeError, ValueError) as exc:
        raise NoRouteFound() from exc


def estimate_drive_time(
    origin_address: str,
    destination_address: str,
    *,
    geocode_url: str = DEFAULT_GEOCODE_API,
    routing_url: str = DEFAULT_ROUTING_API,
    http: requests.Session = session,
) -> RouteEstimate:
    """
    Geocode both addresses, then ask for a driving route between them.

    Args:
        origin_address: Free-form start address or postcode.
        destination_address: Free-form destination.
        geocode_url: Nominatim base URL.
        routing_url: OSRM base URL.
        http: Session to use.

    Returns:
        RouteEstimate with the raw seconds and the display string.
    """
    origin = geocode(origin_address, base_url=geocode_url, http=http)
    destination = geocode(destination_address, base_url=geocode_url, http=http)
    logger.debug("Routing %s -> %s", origin, destination)

    seconds = route_duration(origin, destination, base_url=routing_url, http=http)
    return RouteEstimate(duration_seconds=seconds, formatted_duration=format_duration(seconds))
