"""
requests.Session factory for the occurrence API.

Reads (GET/HEAD/OPTIONS) are retried on 429 and gateway errors with
exponential backoff; POST/PATCH/DELETE go out once. Every request gets
``DEFAULT_TIMEOUT`` unless the caller passes its own ``timeout``.

``ApiClient`` takes the module-level ``session`` by default::

    from occurrence_desk.services.http import session

    resp = session.get("http://localhost:3333/ocurrences", params={"page": 1})
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Reads only. A replayed POST could create a duplicate user.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # the API client turns statuses into ApiError
)

DEFAULT_TIMEOUT = 15  # seconds

USER_AGENT = "occurrence-desk/0.1"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Session with the retry adapter, project headers and a default timeout.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "application/json"

    # requests has no session-wide timeout
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Shared by every ApiClient built without an explicit session.
session: requests.Session = create_session()
