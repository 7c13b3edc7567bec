"""Pure rendering functions: fetch states -> panels -> HTML or text.

All renderers follow the same pattern:
  - Input: ``FetchState`` snapshots or ``Panel`` view-models
  - Output: ``Panel`` objects or ``str`` (HTML page or terminal text)
  - No side effects, no I/O, no Prefect decorators

Used by ``Dashboard.panels()``, flows/refresh.py and the CLI.

Public API:
  - panels: Panel, build_panels, one ``*_panel`` function per source
  - dashboard: build_dashboard_html, build_dashboard_text
  - weather_utils: condition_description, condition_icon

Adding a panel
--------------
1. Write ``{name}_panel(state) -> Panel`` in ``renderers/panels.py`` and
   add it to the builders in ``build_panels`` under the fetcher's name.

2. The grid in ``templates/dashboard.html.j2`` renders panels in the order
   ``Dashboard.fetchers`` lists them, three per row.

3. Add tests: build the panel from a hand-made ``FetchState`` and assert
   on its lines.
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
