"""Mapbox Optimization response models and the fetch result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field


class Trip(BaseModel):
    """One optimized trip. ``geometry`` is an encoded polyline."""

    geometry: str
    distance: float | None = None
    duration: float | None = None


class Waypoint(BaseModel):
    """An input coordinate snapped to the road network."""

    waypoint_index: int
    trips_index: int = 0
    location: list[float] = Field(default_factory=list)
    name: str = ""


class OptimizationResponse(BaseModel):
    """Body of ``GET /optimized-trips/v1``."""

    code: str = "Ok"
    message: str | None = None
    trips: list[Trip] = Field(default_factory=list)
    waypoints: list[Waypoint] = Field(default_factory=list)


@dataclass
class RouteSuccess:
    """A decoded route ready to draw."""

    geometry: dict[str, Any]
    distance_m: float | None = None
    duration_s: float | None = None
    visit_order: list[int] = field(default_factory=list)


@dataclass
class RouteFailure:
    """Why no route came back."""

    reason: str


TripResult = RouteSuccess | RouteFailure
