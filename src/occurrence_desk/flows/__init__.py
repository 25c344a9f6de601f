"""
Prefect flows.

Flows:
- report: fetch occurrences, aggregate a month, write site/statistics.html

Usage (local):
    python -m occurrence_desk.flows.report
    occurrence-desk report --month 02/2024

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'build-statistics-report/default'
"""
