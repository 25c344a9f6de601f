"""Monthly statistics screen controller.

States::

    LOADING ──mount ok──> LOADED_DEFAULT_MONTH ──select_month──> LOADED_USER_SELECTION
       │                                                              │  ▲
       └──fetch failed──> ERROR                                       └──┘

A new ``mount()`` is the only way back to LOADING. ``dispose()`` cancels an
in-flight mount so its result is dropped instead of written to a dead view.
"""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import ValidationError

from occurrence_desk.analysis.monthly import (
    NOT_APPLICABLE,
    MonthKey,
    MonthSummary,
    extract_month_keys,
    filter_by_month_key,
    most_recent_month_key,
    summarize,
)
from occurrence_desk.datasources.api import ApiError, fetch_occurrences
from occurrence_desk.datasources.api.occurrences import DEFAULT_PAGE_SIZE

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import tzinfo

    from occurrence_desk.datasources.api import ApiClient
    from occurrence_desk.schemas import Occurrence, OccurrencePage

    FetchPage = Callable[[int, int, bool], OccurrencePage]

logger = logging.getLogger(__name__)


class ViewState(StrEnum):
    LOADING = "loading"
    LOADED_DEFAULT_MONTH = "loaded_default_month"
    LOADED_USER_SELECTION = "loaded_user_selection"
    ERROR = "error"


LOADED_STATES = (ViewState.LOADED_DEFAULT_MONTH, ViewState.LOADED_USER_SELECTION)


@dataclass(frozen=True)
class Card:
    """One summary tile."""

    title: str
    value: int | None
    display: str


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: int
    color: str


class StatisticsView:
    """Holds the statistics screen state and recomputes it on input changes."""

    def __init__(
        self,
        fetch_page: FetchPage,
        page_size: int = DEFAULT_PAGE_SIZE,
        tz: tzinfo | None = None,
    ) -> None:
        self._fetch_page = fetch_page
        self.page_size = page_size
        self.tz = tz
        self._cancel = threading.Event()

        self.state = ViewState.LOADING
        self.error: str | None = None
        self.occurrences: list[Occurrence] = []
        self.months: list[MonthKey] = []
        self.selected_month: MonthKey | None = None
        self.month_occurrences: list[Occurrence] = []
        self.summary: MonthSummary = summarize([])

    @classmethod
    def from_api(
        cls, api: ApiClient, page_size: int = DEFAULT_PAGE_SIZE, tz: tzinfo | None = None
    ) -> StatisticsView:
        return cls(functools.partial(fetch_occurrences, api), page_size=page_size, tz=tz)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def disposed(self) -> bool:
        return self._cancel.is_set()

    def dispose(self) -> None:
        """Stop accepting results. Safe to call from another thread."""
        self._cancel.set()

    def mount(self, cancel: threading.Event | None = None) -> ViewState:
        """
        Fetch live + archived occurrences, then select the most recent month.

        Args:
            cancel: Token owned by the caller. Once set, the view counts as
                disposed and any result still in flight is dropped.
        """
        if cancel is not None:
            self._cancel = cancel
        if self.disposed:
            return self.state

        self.state = ViewState.LOADING
        self.error = None

        try:
            live = self._fetch_page(1, self.page_size, False)
            if self.disposed:
                return self.state
            archived = self._fetch_page(1, self.page_size, True)
        except (ApiError, ValidationError) as exc:
            if self.disposed:
                return self.state
            logger.exception("Failed to load occurrences")
            self.state = ViewState.ERROR
            self.error = getattr(exc, "message", None) or str(exc)
            return self.state

        if self.disposed:
            logger.debug("Statistics view disposed before fetch completed; dropping result")
            return self.state

        self.occurrences = sorted(live.data + archived.data, key=lambda o: o.id)
        self.months = extract_month_keys(self.occurrences, self.tz)
        self._show(most_recent_month_key(self.months))
        self.state = ViewState.LOADED_DEFAULT_MONTH
        return self.state

    def select_month(self, key: MonthKey | str | None) -> bool:
        """
        Switch the summary to another month.

        A cleared picker (None) and selections made before loading finished
        are ignored. Returns True when the selection was applied.
        """
        if key is None or self.state not in LOADED_STATES or self.disposed:
            return False
        self._show(MonthKey.coerce(key))
        self.state = ViewState.LOADED_USER_SELECTION
        return True

    def _show(self, key: MonthKey | None) -> None:
        self.selected_month = key
        if key is None:
            self.month_occurrences = []
        else:
            self.month_occurrences = filter_by_month_key(self.occurrences, key, self.tz)
        self.summary = summarize(self.month_occurrences)

    # -------------------------------------------------------------------------
    # Presentation data
    # -------------------------------------------------------------------------

    def visualization(self) -> list[Card]:
        s = self.summary
        pct = None if s.resolved_percentage is NOT_APPLICABLE else s.resolved_percentage
        return [
            Card("Occurrences created", s.total, str(s.total)),
            Card("Open occurrences", s.open, str(s.open)),
            Card("Resolved occurrences", s.resolved, str(s.resolved)),
            Card("Canceled occurrences", s.canceled, str(s.canceled)),
            Card("Resolved (%)", pct, s.percentage_label),
        ]

    def chart_series(self) -> dict[str, list[PieSlice]]:
        s = self.summary
        return {
            "status": [
                PieSlice("Open", s.open, "#bdbdbd"),
                PieSlice("Canceled", s.canceled, "#757575"),
                PieSlice("Resolved", s.resolved, "#454545"),
            ],
            "resolution": [
                PieSlice("Unresolved", s.open, "#bdbdbd"),
                PieSlice("Resolved", s.resolved, "#757575"),
            ],
        }

    def month_labels(self) -> list[str]:
        return [m.label for m in self.months]
