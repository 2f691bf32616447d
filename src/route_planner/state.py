"""
Application state: placed markers, the coordinate accumulator and the route.

One ``AppState`` per planner session. It owns the route layer and keeps the
map surface in sync with its own contents; nothing else adds or removes
planner layers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from route_planner.schemas import LatLng, Marker, Phase, RouteLayer
from route_planner.surface import MapSurface, ResetControl

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class AppState:
    """Markers in placement order plus the route drawn over them."""

    def __init__(
        self,
        surface: MapSurface | None = None,
        reset_control: ResetControl | None = None,
    ) -> None:
        self.surface = surface if surface is not None else MapSurface()
        self.reset_control = reset_control if reset_control is not None else ResetControl()
        self.markers: list[Marker] = []
        self.route: RouteLayer | None = None
        self.phase = Phase.AWAITING_FIRST_MARKER
        self.last_failure: str | None = None
        self._coordinates: list[str] = []

    @property
    def coordinates(self) -> Sequence[str]:
        """``lng,lat`` pair per marker, in placement order."""
        return tuple(self._coordinates)

    def add_marker(self, position: LatLng) -> Marker:
        """Put a marker on the map and append its coordinate."""
        marker = Marker(position=position)
        self.surface.add_layer(marker)
        self.markers.append(marker)
        self._coordinates.append(position.as_lng_lat())
        return marker

    def set_route(self, layer: RouteLayer) -> None:
        """Replace the route layer, taking the old one off the map first."""
        if self.route is not None:
            self.surface.remove_layer(self.route.layer_id)
        self.surface.add_layer(layer)
        self.route = layer

    def reset(self) -> None:
        """Clear everything off the map and hide the reset control."""
        for marker in self.markers:
            self.surface.remove_layer(marker.layer_id)
        if self.route is not None:
            self.surface.remove_layer(self.route.layer_id)

        cleared = len(self.markers)
        self.markers = []
        self.route = None
        self._coordinates = []
        self.last_failure = None
        self.phase = Phase.AWAITING_FIRST_MARKER
        self.reset_control.hide()
        if cleared:
            logger.info("Reset map, removed %d marker(s)", cleared)

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the state for the planner page."""
        return {
            "phase": str(self.phase),
            "markers": [
                {"id": m.layer_id, "lat": m.position.lat, "lng": m.position.lng}
                for m in self.markers
            ],
            "route": None
            if self.route is None
            else {
                "id": self.route.layer_id,
                "feature": self.route.to_feature(),
                "style": self.route.style.model_dump(),
            },
            "reset_visible": self.reset_control.visible,
            "last_failure": self.last_failure,
        }
