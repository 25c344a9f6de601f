"""Shared fixtures."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import Mock

import pytest

from occurrence_desk.config import get_settings


def _make_response(status: int = 200, body: Any = None, reason: str = "OK") -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.reason = reason
    resp.content = b"" if body is None else json.dumps(body).encode()
    if body is None:
        resp.json.side_effect = ValueError("no body")
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Factory for stand-ins of ``requests.Response`` with the attributes ApiClient reads."""
    return _make_response


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop the settings cache and any OCCURRENCE_DESK_* env between tests."""
    for key in list(os.environ):
        if key.startswith("OCCURRENCE_DESK_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("OCCURRENCE_DESK_TIMEZONE", "UTC")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
