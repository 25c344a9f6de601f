"""Occurrence list fetching."""

from __future__ import annotations

from typing import TYPE_CHECKING

from occurrence_desk.schemas import Occurrence, OccurrencePage

if TYPE_CHECKING:
    from occurrence_desk.datasources.api.client import ApiClient

OCCURRENCES_PATH = "/ocurrences"

#: Page size used when the statistics page pulls everything in one request.
DEFAULT_PAGE_SIZE = 500


def fetch_occurrences(
    api: ApiClient,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    archived: bool = False,
) -> OccurrencePage:
    """
    Fetch one page of occurrences.

    Args:
        api: Configured API client.
        page: 1-based page number.
        page_size: Records per page.
        archived: Fetch the archived category instead of the live one.

    Returns:
        OccurrencePage with parsed records.

    Raises:
        ApiError: If the request fails.
    """
    params = {"page": page, "limit": page_size, "archived": str(archived).lower()}
    body = api.get(OCCURRENCES_PATH, params=params)
    if isinstance(body, list):
        # Some deployments return the bare list without a meta envelope
        return OccurrencePage(data=[Occurrence.model_validate(o) for o in body])
    return OccurrencePage.model_validate(body or {})
