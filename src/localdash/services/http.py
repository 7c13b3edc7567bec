"""
Shared HTTP client.

Provides a pre-configured ``requests.Session`` with a default timeout and a
project User-Agent. Retries are off: a failed request surfaces as a failed
fetch and the user re-triggers it.

``get_json`` and ``get_text`` wrap the usual ``get`` / ``raise_for_status``
dance and translate ``requests`` exceptions into :mod:`localdash.errors`.

Usage::

    from localdash.services.http import get_json, session

    data = get_json(session, "https://api.example.com/v1/data", params={...})
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from localdash.errors import DecodeFailure, InvalidRequest, TransportFailure

logger = logging.getLogger(__name__)

#: No automatic retries; the user-visible remedy is a manual refresh.
DEFAULT_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "localdash/0.1 (personal dashboard)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()


def _get(
    http: requests.Session, url: str, params: dict[str, Any] | None = None
) -> requests.Response:
    try:
        resp = http.get(url, params=params)
        resp.raise_for_status()
    except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as exc:
        raise InvalidRequest(f"Invalid URL: {url}") from exc
    except requests.RequestException as exc:
        logger.warning("GET %s failed: %s", url, exc)
        raise TransportFailure(str(exc)) from exc
    return resp


def get_json(
    http: requests.Session, url: str, params: dict[str, Any] | None = None
) -> Any:
    """
    GET ``url`` and decode the JSON body.

    Raises:
        InvalidRequest: The URL is malformed.
        TransportFailure: Connection, timeout or HTTP status error.
        DecodeFailure: The body is not valid JSON.
    """
    resp = _get(http, url, params)
    try:
        return resp.json()
    except ValueError as exc:
        raise DecodeFailure(f"Invalid JSON from {url}") from exc


def get_text(
    http: requests.Session, url: str, params: dict[str, Any] | None = None
) -> str:
    """GET ``url`` and return the decoded body text."""
    resp = _get(http, url, params)
    if resp.encoding is None:
        resp.encoding = "utf-8"
    return resp.text
