"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: a view controller or dataclasses (from views/ or analysis/)
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/report.py which wraps fragments in ``base.html.j2``.

Public API:
  - statistics: build_statistics_html, conic_gradient

Adding a renderer (UI module)
-----------------------------
1. Create ``renderers/{name}.py`` with a build function::

       from occurrence_desk.renderers import render_template

       def build_mywidget_html(data: MyData) -> str:
           rows = [...]
           return render_template("mywidget.html.j2", rows=rows)

2. Create a Jinja2 template in ``templates/{name}.html.j2``.
   Templates produce HTML fragments (no <html>/<body> tags).
   CSS goes in ``templates/base.html.j2`` within the <style> block.

3. Add tests: call your build function with sample data and assert
   the returned HTML contains expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
