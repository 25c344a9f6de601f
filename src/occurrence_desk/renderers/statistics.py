"""Monthly statistics HTML renderer.

Summary cards, a status pie and a resolution pie for the selected month,
plus the list of months the picker offers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from occurrence_desk.renderers import render_template
from occurrence_desk.views.statistics import ViewState

if TYPE_CHECKING:
    from occurrence_desk.views.statistics import PieSlice, StatisticsView

EMPTY_PIE_COLOR = "#eeeeee"


def conic_gradient(slices: list[PieSlice]) -> str:
    """CSS ``conic-gradient`` for a pie. Zero-valued slices are skipped."""
    total = sum(s.value for s in slices)
    if total <= 0:
        return f"conic-gradient({EMPTY_PIE_COLOR} 0% 100%)"

    stops = []
    start = 0.0
    for s in slices:
        if s.value <= 0:
            continue
        end = start + 100 * s.value / total
        stops.append(f"{s.color} {start:.2f}% {end:.2f}%")
        start = end
    return f"conic-gradient({', '.join(stops)})"


def build_statistics_html(view: StatisticsView) -> str:
    """Build the statistics section for the view's current state."""
    if view.state == ViewState.LOADING:
        return "<p>Loading occurrences...</p>"
    if view.state == ViewState.ERROR:
        return render_template("statistics_error.html.j2", error=view.error or "Unknown error")
    if view.selected_month is None:
        return "<p>No occurrences recorded yet.</p>"

    charts = [
        {
            "title": title,
            "gradient": conic_gradient(slices),
            # Labels only for non-empty slices, like the arc labels on the page
            "legend": [
                {"label": s.label, "value": s.value if s.value else "", "color": s.color}
                for s in slices
            ],
        }
        for title, slices in (
            ("Occurrences", view.chart_series()["status"]),
            ("Resolution rate", view.chart_series()["resolution"]),
        )
    ]

    return render_template(
        "statistics.html.j2",
        month_label=view.selected_month.label,
        cards=view.visualization(),
        charts=charts,
        months=view.month_labels(),
    )
