"""National Rail departures data source (via Huxley 2).

Next departure in each direction from the configured station.

Public API:
  - departures: fetch_departures, select_departures, classify_direction, departure_status
"""

from localdash.datasources.trains.client import (
    BRIDGEND_BOUND_TOWNS,
    CARDIFF_BOUND_TOWNS,
    DEFAULT_API,
)
from localdash.datasources.trains.departures import (
    classify_direction,
    departure_status,
    fetch_departures,
    select_departures,
)

__all__ = [
    "BRIDGEND_BOUND_TOWNS",
    "CARDIFF_BOUND_TOWNS",
    "DEFAULT_API",
    "classify_direction",
    "departure_status",
    "fetch_departures",
    "select_departures",
]
