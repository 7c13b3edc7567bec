"""LocalDash - a personal dashboard of local conditions.

Architecture::

    datasources/   External sources (Open-Meteo, tidetimes.org.uk, Huxley 2,
                   Nominatim + OSRM, TheSportsDB)
    fetchers.py    One fetcher per source: executor, throttle, state machine
    state.py       Immutable FetchState snapshots and the observable container
    store.py       In-memory result cache with valid_until
    settings.py    User settings (location, station) with validation and JSON persistence
    renderers/     Pure FetchState -> Panel -> HTML/text
    flows/         Prefect orchestration (refresh all sources, write the site)
    services/      Shared utilities (HTTP session, logging)

Data flow: settings -> fetchers -> datasources -> store (cache) -> state -> renderers

Extension points, see each package's docstring for step-by-step guides:
  - New data source:   datasources/__init__.py
  - New panel:         renderers/__init__.py
"""

__version__ = "0.1.0"

from localdash.config import AppConfig
from localdash.settings import Settings

__all__ = ["AppConfig", "Settings", "__version__"]
