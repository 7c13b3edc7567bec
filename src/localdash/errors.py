"""
Fetch error taxonomy.

Every failure inside a fetcher is one of these. The fetcher turns them into
a ``failed`` state whose message is shown in place of the data, so the
message should read well on its own.
"""

from __future__ import annotations


class FetchError(Exception):
    """Base class for anything that can go wrong while fetching a source."""

    kind = "fetch_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(FetchError):
    """The request could not be built (bad URL or parameters)."""

    kind = "invalid_request"


class TransportFailure(FetchError):
    """Network, DNS, timeout or HTTP status failure."""

    kind = "transport_failure"


class DecodeFailure(FetchError):
    """The response body did not have the expected shape."""

    kind = "decode_failure"


class ParseFailure(FetchError):
    """A field could not be extracted from a scraped page."""

    kind = "parse_failure"

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Could not parse {field.replace('_', ' ')}")
        self.field = field


class GeocodingFailed(FetchError):
    """An address did not resolve to a coordinate."""

    kind = "geocoding_failed"

    def __init__(self, address: str) -> None:
        super().__init__(f"Could not geocode address: {address}")
        self.address = address


class NoRouteFound(FetchError):
    """The routing service returned no usable route."""

    kind = "no_route_found"

    def __init__(self, message: str = "No route found") -> None:
        super().__init__(message)


class NoDataAvailable(FetchError):
    """
    Nothing to show, e.g. no recent result.

    Caught inside the datasource and its message used as the displayed
    value; it never reaches a fetcher as a failure.
    """

    kind = "no_data_available"
