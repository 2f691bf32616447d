"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: settings, state snapshots or route layers
  - Output: str (a full HTML page)
  - No side effects, no I/O, no Prefect decorators

Public API:
  - planner_page: build_planner_page_html (interactive click-to-route page)
  - route_map: build_route_map_html (static map of one planned route)
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


def map_view(center: tuple[float, float], zoom: int, tiles: Any) -> dict[str, Any]:
    """Leaflet view + basemap options shared by both pages."""
    return {
        "center": list(center),
        "zoom": zoom,
        "tile_url": tiles.url,
        "tile_options": {"attribution": tiles.attribution, "subdomains": tiles.subdomains},
    }
