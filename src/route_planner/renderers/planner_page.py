"""Interactive planner page.

Leaflet map with a Leaflet.draw toolbar limited to point markers. Every
``draw:created`` event is posted to the local server, and the page redraws
markers, route and the reset button from the state that comes back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from route_planner.renderers import map_view, render_template

if TYPE_CHECKING:
    from route_planner.surface import MapSurface

# Leaflet.draw toolbar: markers only
DRAW_OPTIONS: dict[str, Any] = {
    "polyline": False,
    "polygon": False,
    "circle": False,
    "circlemarker": False,
    "rectangle": False,
    "marker": True,
}


def build_planner_page_html(
    surface: MapSurface,
    initial_state: dict[str, Any],
    title: str = "Route Planner",
) -> str:
    """Render the click-to-route page for a map surface and its current state."""
    return render_template(
        "planner.html.j2",
        title=title,
        view=map_view(surface.center, surface.zoom, surface.tiles),
        draw_options=DRAW_OPTIONS,
        initial_state=initial_state,
    )
