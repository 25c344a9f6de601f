"""Occurrence Desk - staff front-end for reported occurrences.

Architecture::

    datasources/   REST API client (occurrences, users)
    analysis/      Pure aggregation (monthly occurrence statistics)
    views/         View controllers and route guards (statistics, users)
    renderers/     Pure data → HTML (statistics page)
    flows/         Prefect orchestration (fetch, aggregate, render the report)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → analysis → views → renderers → site/

Extension points (see each package's docstring):
  - New API endpoint:  datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New UI module:     renderers/__init__.py
"""

__version__ = "0.1.0"

from occurrence_desk.config import Settings
from occurrence_desk.schemas import Occurrence

__all__ = ["Occurrence", "Settings", "__version__"]
