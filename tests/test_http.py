"""Tests for the shared HTTP client with retry logic."""

from __future__ import annotations

from unittest.mock import patch

import requests
from urllib3.util.retry import Retry

from occurrence_desk.services.http import DEFAULT_RETRY, DEFAULT_TIMEOUT, create_session, session


class TestDefaultRetry:
    """Verify retry strategy configuration."""

    def test_total_retries(self) -> None:
        assert DEFAULT_RETRY.total == 3

    def test_retries_on_server_errors(self) -> None:
        for status in (502, 503, 504):
            assert status in DEFAULT_RETRY.status_forcelist

    def test_retries_on_rate_limit(self) -> None:
        assert 429 in DEFAULT_RETRY.status_forcelist

    def test_mutations_never_retried(self) -> None:
        allowed = DEFAULT_RETRY.allowed_methods
        assert "GET" in allowed
        for method in ("POST", "PATCH", "DELETE"):
            assert method not in allowed


class TestCreateSession:
    """Verify session factory."""

    def test_mounts_retry_adapter(self) -> None:
        s = create_session()
        for url in ("https://example.com", "http://example.com"):
            adapter = s.get_adapter(url)
            assert isinstance(adapter, requests.adapters.HTTPAdapter)
            assert adapter.max_retries.total == 3

    def test_custom_retry(self) -> None:
        s = create_session(retry=Retry(total=10, backoff_factor=1))
        assert s.get_adapter("https://example.com").max_retries.total == 10

    def test_headers(self) -> None:
        s = create_session()
        assert s.headers["User-Agent"].startswith("occurrence-desk/")
        assert s.headers["Accept"] == "application/json"

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
            s.send(prep, timeout=99)
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 99


class TestModuleSession:
    """Verify the module-level singleton."""

    def test_session_is_configured(self) -> None:
        assert session.get_adapter("https://example.com").max_retries.total == 3

    def test_default_timeout(self) -> None:
        assert DEFAULT_TIMEOUT == 15
