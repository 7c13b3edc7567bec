"""Tests for the shared HTTP client and its error translation."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
import requests
from urllib3.util.retry import Retry

from localdash.errors import DecodeFailure, InvalidRequest, TransportFailure
from localdash.services.http import (
    DEFAULT_RETRY,
    DEFAULT_TIMEOUT,
    create_session,
    get_json,
    get_text,
    session,
)


def _response(*, json_data: object = None, text: str = "", encoding: str | None = "utf-8") -> Mock:
    resp = Mock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = json_data
    resp.text = text
    resp.encoding = encoding
    return resp


class TestDefaultRetry:
    """Requests are never retried automatically."""

    def test_no_retries(self) -> None:
        assert DEFAULT_RETRY.total == 0


class TestCreateSession:
    """Verify session factory."""

    def test_returns_session(self) -> None:
        s = create_session()
        assert isinstance(s, requests.Session)

    def test_mounts_https_adapter(self) -> None:
        s = create_session()
        adapter = s.get_adapter("https://example.com")
        assert isinstance(adapter, requests.adapters.HTTPAdapter)

    def test_adapter_has_no_retry(self) -> None:
        s = create_session()
        adapter = s.get_adapter("https://example.com")
        assert adapter.max_retries.total == 0

    def test_custom_retry(self) -> None:
        s = create_session(retry=Retry(total=3))
        adapter = s.get_adapter("http://example.com")
        assert adapter.max_retries.total == 3

    def test_user_agent_header(self) -> None:
        """Nominatim rejects requests without a descriptive User-Agent."""
        s = create_session()
        assert "localdash" in s.headers["User-Agent"]

    def test_default_timeout_injected(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://example.com").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep)
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 42

    def test_explicit_timeout_not_overridden(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://example.com").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep, timeout=5)
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 5


class TestModuleSession:
    def test_default_timeout(self) -> None:
        assert DEFAULT_TIMEOUT == 30

    def test_session_has_user_agent(self) -> None:
        assert "localdash" in session.headers["User-Agent"]


class TestGetJson:
    """``get_json`` decodes bodies and maps requests errors to fetch errors."""

    def test_returns_decoded_body(self) -> None:
        http = Mock()
        http.get.return_value = _response(json_data={"ok": True})
        assert get_json(http, "https://example.com/a", {"q": 1}) == {"ok": True}
        http.get.assert_called_once_with("https://example.com/a", params={"q": 1})

    def test_connection_error_is_transport_failure(self) -> None:
        http = Mock()
        http.get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(TransportFailure, match="boom"):
            get_json(http, "https://example.com")

    def test_http_status_is_transport_failure(self) -> None:
        http = Mock()
        resp = _response()
        resp.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        http.get.return_value = resp
        with pytest.raises(TransportFailure, match="503"):
            get_json(http, "https://example.com")

    def test_malformed_url_is_invalid_request(self) -> None:
        http = Mock()
        http.get.side_effect = requests.exceptions.MissingSchema("no scheme")
        with pytest.raises(InvalidRequest):
            get_json(http, "example.com/no-scheme")

    def test_bad_json_is_decode_failure(self) -> None:
        http = Mock()
        resp = _response()
        resp.json.side_effect = ValueError("Expecting value")
        http.get.return_value = resp
        with pytest.raises(DecodeFailure):
            get_json(http, "https://example.com")

    def test_error_kinds(self) -> None:
        assert TransportFailure("x").kind == "transport_failure"
        assert DecodeFailure("x").kind == "decode_failure"


class TestGetText:
    def test_returns_text(self) -> None:
        http = Mock()
        http.get.return_value = _response(text="<html>hi</html>")
        assert get_text(http, "https://example.com") == "<html>hi</html>"

    def test_missing_encoding_defaults_to_utf8(self) -> None:
        http = Mock()
        resp = _response(text="x", encoding=None)
        http.get.return_value = resp
        get_text(http, "https://example.com")
        assert resp.encoding == "utf-8"
