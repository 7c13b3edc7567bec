"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants
    └── {feature}.py      # Fetch + decode + derive (one per concept)

Sources:
  - weather/    Open-Meteo current conditions and next rain
  - tidetimes/  Scraped tide height/trend and sunrise/sunset
  - trains/     Huxley 2 departures, one per direction
  - routing/    Nominatim + OSRM driving time
  - sports/     TheSportsDB position, last result, next fixture

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above. Keep the derivation
   pure (take ``now`` as an argument) so it can be tested without a clock.

2. Write a fetch function that returns a model from ``localdash.schemas``::

       from localdash.services.http import get_json, session

       def fetch_something(lat, lon, *, http=session) -> Something:
           data = get_json(http, API_URL, params={...})
           return parse_something(data)

   Raise ``localdash.errors`` types for anything that goes wrong.

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Add a ``Fetcher`` subclass in ``fetchers.py``, wire it into
   ``Dashboard`` and give it a panel in ``renderers/panels.py``.

5. Add tests in ``tests/test_{name}.py``.
"""
