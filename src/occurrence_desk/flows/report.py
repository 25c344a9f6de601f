"""
Prefect flow that builds a static statistics report.

Fetches live + archived occurrences, aggregates the requested month (default:
the most recent one) and writes ``statistics.html`` into the site directory.

Run locally:
    python -m occurrence_desk.flows.report

Run with Prefect dashboard:
    prefect server start &
    python -m occurrence_desk.flows.report
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from occurrence_desk.analysis.monthly import MonthKey
from occurrence_desk.config import get_settings
from occurrence_desk.datasources.api import ApiClient, ApiError, fetch_occurrences
from occurrence_desk.renderers import render_template
from occurrence_desk.renderers.statistics import build_statistics_html
from occurrence_desk.schemas import OccurrencePage
from occurrence_desk.views.statistics import StatisticsView, ViewState

REPORT_NAME = "statistics.html"


# =============================================================================
# Tasks
# =============================================================================


@task(name="fetch-occurrences", retries=2, retry_delay_seconds=5, cache_policy=NO_CACHE)
def fetch_occurrence_page(api: ApiClient, page_size: int, archived: bool) -> OccurrencePage:
    """Fetch the first page of live or archived occurrences."""
    return fetch_occurrences(api, 1, page_size, archived=archived)


@task(name="aggregate-month", cache_policy=NO_CACHE)
def aggregate_month(
    live: OccurrencePage, archived: OccurrencePage, month: str | None = None
) -> StatisticsView:
    """Run the statistics controller over already-fetched pages."""
    pages = {False: live, True: archived}
    view = StatisticsView(
        lambda _page, _size, is_archived: pages[is_archived],
        tz=get_settings().tzinfo,
    )
    view.mount()
    if month:
        view.select_month(month)
    return view


@task(name="render-statistics", cache_policy=NO_CACHE)
def render_statistics(view: StatisticsView) -> str:
    """Wrap the statistics fragment in the base page."""
    return render_template(
        "base.html.j2",
        title="Occurrence statistics",
        content=build_statistics_html(view),
        updated=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )


@task(name="write-site", cache_policy=NO_CACHE)
def write_site(html: str, site_dir: Path) -> Path:
    """Write the report HTML to the site directory."""
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / REPORT_NAME
    with output_path.open("w") as f:
        f.write(html)
    return output_path


# =============================================================================
# Flow
# =============================================================================


@flow(name="build-statistics-report", log_prints=True)
def build_report(month: str | None = None, site_dir: Path | None = None) -> dict[str, Any]:
    """
    Build the statistics report.

    Args:
        month: ``MM/YYYY`` month to show instead of the most recent one.
        site_dir: Output directory (defaults to ``settings.site_dir``).
    """
    if month:
        try:
            MonthKey.parse(month)
        except ValueError as exc:
            print(f"Error: {exc}")
            return {"error": str(exc)}

    settings = get_settings()
    api = ApiClient.from_settings(settings)
    out_dir = site_dir or Path(settings.site_dir)

    print(f"Fetching occurrences from {settings.api_base_url}...")
    try:
        live = fetch_occurrence_page(api, settings.fetch_page_size, archived=False)
        archived = fetch_occurrence_page(api, settings.fetch_page_size, archived=True)
    except ApiError as exc:
        print(f"Error: could not fetch occurrences: {exc.message}")
        return {"error": exc.message}

    print(f"Aggregating {len(live.data) + len(archived.data)} occurrences...")
    view = aggregate_month(live, archived, month)
    if view.state == ViewState.ERROR:
        return {"error": view.error}

    print("Rendering statistics...")
    html = render_statistics(view)

    output_path = write_site(html, out_dir)
    print(f"Report built: {output_path}")
    return {
        "pages": 1,
        "output": str(output_path),
        "month": view.selected_month.label if view.selected_month else None,
    }


if __name__ == "__main__":
    result = build_report()
    print(f"Flow complete: {result}")
