"""Group occurrences by calendar month and summarize each month.

Backs the statistics page: the month picker is fed by ``extract_month_keys``,
the default selection is ``most_recent_month_key``, and the summary cards and
pie charts come from ``summarize(filter_by_month_key(...))``.

Month keys are derived in the viewer's time zone. Pass ``tz`` to pin one;
with ``tz=None`` aware timestamps are converted to the host's local zone and
naive timestamps are taken as already local.

All functions are pure and never mutate their input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import TYPE_CHECKING, Literal, NamedTuple

from occurrence_desk.schemas import OccurrenceStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from occurrence_desk.schemas import Occurrence


class NotApplicable(Enum):
    """Marker for a percentage with a zero denominator."""

    NA = "N/A"

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return False


NOT_APPLICABLE = NotApplicable.NA


class MonthKey(NamedTuple):
    """Calendar month + year. Tuple order makes comparison chronological."""

    year: int
    month: int

    @property
    def label(self) -> str:
        """``MM/YYYY`` label shown in the month picker."""
        return f"{self.month:02d}/{self.year:04d}"

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, label: str) -> MonthKey:
        """Parse an ``MM/YYYY`` label.

        Raises:
            ValueError: If the label is malformed or the month is out of range.
        """
        month_str, sep, year_str = label.strip().partition("/")
        if not sep or not month_str.isdigit() or not year_str.isdigit():
            msg = f"Invalid month label {label!r}, expected MM/YYYY"
            raise ValueError(msg)
        month, year = int(month_str), int(year_str)
        if not 1 <= month <= 12:
            msg = f"Invalid month {month} in {label!r}"
            raise ValueError(msg)
        return cls(year=year, month=month)

    @classmethod
    def coerce(cls, key: MonthKey | str) -> MonthKey:
        return key if isinstance(key, MonthKey) else cls.parse(key)

    @classmethod
    def from_datetime(cls, dt: datetime, tz: tzinfo | None = None) -> MonthKey:
        if dt.tzinfo is not None:
            dt = dt.astimezone(tz)
        return cls(year=dt.year, month=dt.month)


@dataclass(frozen=True)
class MonthSummary:
    """Counts for one month. ``open`` absorbs unrecognized statuses."""

    total: int
    open: int
    resolved: int
    canceled: int
    resolved_percentage: int | Literal[NotApplicable.NA]

    @property
    def percentage_label(self) -> str:
        if self.resolved_percentage is NOT_APPLICABLE:
            return str(NOT_APPLICABLE)
        return f"{self.resolved_percentage}%"


def month_key(occurrence: Occurrence, tz: tzinfo | None = None) -> MonthKey:
    """Month key of a single occurrence's creation timestamp."""
    return MonthKey.from_datetime(occurrence.created_at, tz)


def extract_month_keys(
    occurrences: Iterable[Occurrence], tz: tzinfo | None = None
) -> list[MonthKey]:
    """
    Distinct month keys in first-seen order after sorting by ``id``.

    Sorting a copy by id makes discovery order follow creation order even when
    the input is two batches (live + archived) glued together.
    """
    keys: dict[MonthKey, None] = {}
    for occ in sorted(occurrences, key=lambda o: o.id):
        keys.setdefault(month_key(occ, tz), None)
    return list(keys)


def most_recent_month_key(keys: Sequence[MonthKey]) -> MonthKey | None:
    """
    Last key of an ``extract_month_keys`` result, or None when empty.

    This trusts id order to be creation order. If the backend ever hands out
    ids out of sequence the default month will be wrong.
    """
    return keys[-1] if keys else None


def filter_by_month_key(
    occurrences: Iterable[Occurrence],
    key: MonthKey | str,
    tz: tzinfo | None = None,
) -> list[Occurrence]:
    """Occurrences created in ``key``'s month, in input order."""
    target = MonthKey.coerce(key)
    return [occ for occ in occurrences if month_key(occ, tz) == target]


def resolved_percentage(resolved: int, total: int, canceled: int) -> int | Literal[NotApplicable.NA]:
    """``round(100 * resolved / (total - canceled))`` with halves rounded up."""
    denominator = total - canceled
    if denominator <= 0:
        return NOT_APPLICABLE
    return math.floor(100 * resolved / denominator + 0.5)


def summarize(occurrences: Iterable[Occurrence]) -> MonthSummary:
    """Count statuses in one pass and derive open count and resolved share."""
    total = resolved = canceled = 0
    for occ in occurrences:
        total += 1
        if occ.status == OccurrenceStatus.RESOLVED:
            resolved += 1
        elif occ.status == OccurrenceStatus.CANCELED:
            canceled += 1

    return MonthSummary(
        total=total,
        open=total - (canceled + resolved),
        resolved=resolved,
        canceled=canceled,
        resolved_percentage=resolved_percentage(resolved, total, canceled),
    )
