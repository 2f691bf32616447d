"""Static map of a single planned route (batch ``plan`` output)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from route_planner.renderers import map_view, render_template

if TYPE_CHECKING:
    from route_planner.schemas import LatLng, RouteLayer
    from route_planner.surface import TileLayer


def _format_distance(meters: float | None) -> str:
    if meters is None:
        return "unknown distance"
    if meters < 1000:
        return f"{meters:.0f} m"
    return f"{meters / 1000:.1f} km"


def _format_duration(seconds: float | None) -> str:
    """Human-readable duration, e.g. '1 h 05 min'."""
    if seconds is None:
        return "unknown duration"
    minutes = round(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60} h {minutes % 60:02d} min"


def build_route_map_html(
    stops: list[LatLng],
    route: RouteLayer,
    tiles: TileLayer,
    zoom: int = 13,
) -> str:
    """Render a standalone page showing the stops and the optimized route."""
    center = (
        sum(s.lat for s in stops) / len(stops),
        sum(s.lng for s in stops) / len(stops),
    )
    markers: list[dict[str, Any]] = [
        {"lat": s.lat, "lng": s.lng, "label": f"Stop {i + 1}"} for i, s in enumerate(stops)
    ]
    for marker, order in zip(markers, route.visit_order, strict=False):
        marker["label"] += f" (visit #{order + 1})"

    return render_template(
        "route_map.html.j2",
        view=map_view(center, zoom, tiles),
        markers=markers,
        feature=route.to_feature(),
        style=route.style.model_dump(),
        stop_count=len(stops),
        distance=_format_distance(route.distance_m),
        duration=_format_duration(route.duration_s),
    )
