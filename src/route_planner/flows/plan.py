"""
Prefect flow for planning a route from a fixed list of stops.

Batch counterpart of the interactive planner: all stops are placed on one
orchestrator, routed with a single optimization request, and the result is
written as a standalone HTML map.

Run locally:
    ROUTE_PLANNER_MAPBOX_TOKEN=pk... python -m route_planner.flows.plan
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from route_planner.config import get_settings
from route_planner.orchestrator import RouteOrchestrator
from route_planner.renderers.route_map import build_route_map_html
from route_planner.schemas import LatLng, RouteLayer
from route_planner.surface import TileLayer


def parse_stop(text: str) -> LatLng:
    """Parse ``"lat,lng"`` into a position.

    Raises:
        ValueError: Not two comma-separated numbers, or out of range.
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"expected 'lat,lng', got {text!r}")
    return LatLng(lat=float(parts[0]), lng=float(parts[1]))


@task(name="fetch-route")
def fetch_route(stops: list[LatLng]) -> RouteLayer | str:
    """Place every stop and return the resulting route, or the failure reason.

    Transient upstream errors are already retried by the shared HTTP session.
    """
    orchestrator = RouteOrchestrator.from_settings(get_settings())
    orchestrator.place_all(stops)

    state = orchestrator.state
    if state.route is None:
        return state.last_failure or "no route returned"
    return state.route


@task(name="build-map")
def build_map(stops: list[LatLng], route: RouteLayer) -> str:
    """Render the stops and route as a standalone page."""
    settings = get_settings()
    tiles = TileLayer(
        url=settings.tile_url,
        attribution=settings.tile_attribution,
        subdomains=settings.tile_subdomains,
    )
    return build_route_map_html(stops, route, tiles, zoom=settings.zoom)


@task(name="write-site")
def write_site(html: str, output: Path) -> Path:
    """Write HTML to the output path."""
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w") as f:
        f.write(html)
    return output


@flow(name="plan-route", log_prints=True)
def plan_route(stops: list[str], output: Path | None = None) -> dict[str, Any]:
    """
    Plan an optimized route over ``"lat,lng"`` stops and write it as a map.

    Returns a summary dict; ``"error"`` is set when no route could be planned.
    """
    positions = [parse_stop(s) for s in stops]
    if len(positions) < 2:
        print("Need at least two stops to plan a route.")
        return {"error": "need at least two stops"}

    print(f"Planning route over {len(positions)} stops...")
    result = fetch_route(positions)
    if isinstance(result, str):
        print(f"No route: {result}")
        return {"error": result}

    print("Building map...")
    html = build_map(positions, result)

    output = output or get_settings().site_dir / "route.html"
    path = write_site(html, output)

    print(f"Route map written: {path}")
    return {
        "stops": len(positions),
        "distance_m": result.distance_m,
        "duration_s": result.duration_s,
        "visit_order": result.visit_order,
        "output": str(path),
    }


if __name__ == "__main__":
    summary = plan_route(["42.3736,-71.1097", "42.3601,-71.0942", "42.3663,-71.1064"])
    print(f"Flow complete: {summary}")
