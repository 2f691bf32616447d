"""
Route orchestration: what happens when the user drops a marker.

The first marker only goes on the map. Every marker after that triggers an
optimized-trip request over all markers placed so far; a successful response
replaces the route and reveals the reset control. A failed one is logged and
leaves the current route where it is.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from route_planner.datasources.mapbox import RouteFailure, fetch_optimized_route
from route_planner.schemas import LatLng, LineStyle, Phase, RouteLayer
from route_planner.state import AppState
from route_planner.surface import MapSurface

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from route_planner.config import Settings
    from route_planner.datasources.mapbox import TripResult
    from route_planner.schemas import Marker

    RouteFetcher = Callable[[Sequence[str]], TripResult]

logger = logging.getLogger(__name__)


class RouteOrchestrator:
    """Handles marker creation and reset for one planner session."""

    def __init__(
        self,
        state: AppState,
        fetch_route: RouteFetcher,
        style: LineStyle | None = None,
    ) -> None:
        self.state = state
        self.fetch_route = fetch_route
        self.style = style or LineStyle()

    @classmethod
    def from_settings(cls, settings: Settings) -> RouteOrchestrator:
        """Wire a fresh state and the Mapbox fetcher from settings."""
        fetcher = functools.partial(
            fetch_optimized_route,
            token=settings.mapbox_token,
            profile=settings.profile,
            api_base=settings.mapbox_api,
        )
        return cls(AppState(MapSurface.from_settings(settings)), fetcher)

    def handle_marker_created(self, lat: float, lng: float) -> Marker:
        """React to a "marker created" event from the drawing control."""
        marker = self.state.add_marker(LatLng(lat=lat, lng=lng))
        logger.info(
            "Marker %d placed at %.5f, %.5f",
            marker.layer_id,
            marker.position.lat,
            marker.position.lng,
        )

        if self.state.phase is Phase.AWAITING_FIRST_MARKER:
            self.state.phase = Phase.AWAITING_SECOND_MARKER
            return marker

        self.state.phase = Phase.ROUTING
        self._update_route()
        return marker

    def place_all(self, positions: Sequence[LatLng]) -> list[Marker]:
        """Place several markers at once and route over them with one request."""
        markers = [self.state.add_marker(p) for p in positions]
        logger.info("Placed %d markers", len(markers))

        if len(self.state.markers) == 0:
            return markers
        if len(self.state.markers) == 1:
            self.state.phase = Phase.AWAITING_SECOND_MARKER
            return markers

        self.state.phase = Phase.ROUTING
        self._update_route()
        return markers

    def reset(self) -> None:
        self.state.reset()

    def _update_route(self) -> None:
        coordinates = self.state.coordinates
        result = self.fetch_route(coordinates)

        if isinstance(result, RouteFailure):
            logger.warning(
                "No route for %d stops, keeping previous route: %s",
                len(coordinates),
                result.reason,
            )
            self.state.last_failure = result.reason
            return

        layer = RouteLayer(
            geometry=result.geometry,
            style=self.style.model_copy(),
            distance_m=result.distance_m,
            duration_s=result.duration_s,
            visit_order=result.visit_order,
        )
        self.state.set_route(layer)
        self.state.last_failure = None
        self.state.reset_control.show()
        logger.info(
            "Route over %d stops: %d vertices, %s m",
            len(coordinates),
            len(layer.coordinates),
            "?" if layer.distance_m is None else f"{layer.distance_m:.0f}",
        )
