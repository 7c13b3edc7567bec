"""Driving-time data source (Nominatim geocoding + OSRM routing).

Public API:
  - drive_time: Coordinate, geocode, route_duration, estimate_drive_time, format_duration
"""

from localdash.datasources.routing.client import DEFAULT_GEOCODE_API, DEFAULT_ROUTING_API
from localdash.datasources.routing.drive_time import (
    Coordinate,
    estimate_drive_time,
    format_duration,
    geocode,
    route_duration,
)

__all__ = [
    "DEFAULT_GEOCODE_API",
    "DEFAULT_ROUTING_API",
    "Coordinate",
    "estimate_drive_time",
    "format_duration",
    "geocode",
    "route_duration",
]
