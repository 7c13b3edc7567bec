"""tidetimes.org.uk page client.

The tide and sun sources both scrape the same town page. There is no
location parameter; the page URL (and the town named in its text) come
from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from localdash.services.http import get_text, session

if TYPE_CHECKING:
    import requests

DEFAULT_PAGE_URL = "https://www.tidetimes.org.uk/barry-tide-times"


def fetch_page(url: str = DEFAULT_PAGE_URL, *, http: requests.Session = session) -> str:
    """Fetch the tide-times HTML document."""
    return get_text(http, url)
