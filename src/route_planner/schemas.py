"""
Domain models for the route planner.

Pydantic models for what lives on the map and what the page receives.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

# =============================================================================
# Planner phase
# =============================================================================


class Phase(StrEnum):
    """Where the planner is in the marker -> route cycle."""

    AWAITING_FIRST_MARKER = "awaiting_first_marker"
    AWAITING_SECOND_MARKER = "awaiting_second_marker"
    ROUTING = "routing"


# =============================================================================
# Map layers
# =============================================================================


class LatLng(BaseModel):
    """Geographic position."""

    model_config = {"frozen": True}

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def as_lng_lat(self) -> str:
        """Coordinate pair in the ``lng,lat`` form Mapbox expects."""
        return f"{self.lng},{self.lat}"


class Marker(BaseModel):
    """A placed point. ``layer_id`` is assigned by the map surface."""

    position: LatLng
    layer_id: int | None = None


class LineStyle(BaseModel):
    """Leaflet path options for the route line."""

    color: str = "#ff7800"
    weight: int = 5
    opacity: float = Field(default=0.65, ge=0, le=1)


class RouteLayer(BaseModel):
    """The rendered optimized route over the current markers."""

    geometry: dict[str, Any] = Field(..., description="GeoJSON LineString, [lng, lat] pairs")
    style: LineStyle = Field(default_factory=LineStyle)
    distance_m: float | None = None
    duration_s: float | None = None
    visit_order: list[int] = Field(
        default_factory=list,
        description="Position of each input marker in the optimized trip",
    )
    layer_id: int | None = None

    @property
    def coordinates(self) -> list[list[float]]:
        """Line vertices as ``[lng, lat]`` pairs."""
        coords: list[list[float]] = self.geometry.get("coordinates", [])
        return coords

    def to_feature(self) -> dict[str, Any]:
        """GeoJSON Feature for ``L.geoJSON``."""
        return {
            "type": "Feature",
            "geometry": self.geometry,
            "properties": {
                "distance_m": self.distance_m,
                "duration_s": self.duration_s,
                "visit_order": self.visit_order,
            },
        }
