"""Geocoding and routing service constants.

- Nominatim (OpenStreetMap geocoder): https://nominatim.org/release-docs/latest/api/Search/
- OSRM route service: https://project-osrm.org/docs/v5.24.0/api/#route-service

Both are free and keyless; Nominatim asks for a descriptive User-Agent,
which the shared session sets.
"""

DEFAULT_GEOCODE_API = "https://nominatim.openstreetmap.org"
DEFAULT_ROUTING_API = "https://router.project-osrm.org"

SEARCH_PATH = "/search"
ROUTE_PATH = "/route/v1/driving/{origin};{destination}"
