"""Domain logic over fetched records.

Dependency rule: analysis/ imports from schemas only.
It never fetches data or produces HTML.

Modules:
  - monthly: occurrences -> month keys, per-month filtering, MonthSummary

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with pure functions::

       from occurrence_desk.schemas import Occurrence

       def summarize_something(occurrences: list[Occurrence]) -> SomeSummary:
           ...

2. Rules:
   - Take models, return dataclasses. No I/O, no HTTP, no Prefect decorators.
   - Never mutate the input list; sort copies.

3. Call it from a view controller or ``flows/report.py`` and pass the result
   to a renderer.

4. Re-export below and add tests in ``tests/test_{name}.py``.
"""

from occurrence_desk.analysis.monthly import (
    NOT_APPLICABLE,
    MonthKey,
    MonthSummary,
    extract_month_keys,
    filter_by_month_key,
    most_recent_month_key,
    summarize,
)

__all__ = [
    "NOT_APPLICABLE",
    "MonthKey",
    "MonthSummary",
    "extract_month_keys",
    "filter_by_month_key",
    "most_recent_month_key",
    "summarize",
]
