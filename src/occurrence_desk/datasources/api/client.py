"""Low-level REST API access: base URL, auth header, error mapping."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from occurrence_desk.services.http import session as default_session

if TYPE_CHECKING:
    from occurrence_desk.config import Settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API rejected a request or could not be reached.

    ``message`` is the server's own explanation when it sent one, suitable
    for showing to the user. ``status_code`` is None for network failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp: requests.Response) -> str:
    """Pull the human-readable message out of an error response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        if message:
            return str(message)
    return resp.reason or f"HTTP {resp.status_code}"


class ApiClient:
    """Thin JSON wrapper around the shared session."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or default_session

    @classmethod
    def from_settings(cls, settings: Settings) -> ApiClient:
        return cls(settings.api_base_url, token=settings.api_token)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ApiError: On non-2xx responses or network failures.
        """
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.session.request(
                method, url, params=params, json=json, headers=self._headers()
            )
        except requests.RequestException as exc:
            raise ApiError(f"Could not reach API: {exc}") from exc

        if not resp.ok:
            message = _error_message(resp)
            logger.warning("%s %s failed (%s): %s", method, url, resp.status_code, message)
            raise ApiError(message, status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError("API returned a non-JSON body", status_code=resp.status_code) from exc

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
