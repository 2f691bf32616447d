"""
Shared pytest fixtures for route planner tests.

The orchestrator takes its route fetcher as a plain callable, so most tests
swap Mapbox out for a ``FakeFetcher`` that records every coordinate list it
was asked about and answers with a canned result.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from route_planner.datasources.mapbox import RouteFailure, RouteSuccess, TripResult
from route_planner.geometry import polyline_to_linestring
from route_planner.orchestrator import RouteOrchestrator
from route_planner.state import AppState
from route_planner.surface import MapSurface, ResetControl

# Canonical example from Google's encoded polyline algorithm docs
SAMPLE_ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
SAMPLE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
SAMPLE_LNG_LAT = [[-120.2, 38.5], [-120.95, 40.7], [-126.453, 43.252]]

SAMPLE_TRIP_RESPONSE: dict = {
    "code": "Ok",
    "trips": [
        {
            "geometry": SAMPLE_ENCODED,
            "distance": 1523.4,
            "duration": 312.7,
            "weight": 312.7,
        }
    ],
    "waypoints": [
        {"waypoint_index": 0, "trips_index": 0, "location": [-71.103, 42.378], "name": "A St"},
        {"waypoint_index": 2, "trips_index": 0, "location": [-71.1, 42.38], "name": "B St"},
        {"waypoint_index": 1, "trips_index": 0, "location": [-71.09, 42.37], "name": "C St"},
    ],
}


@dataclass
class FakeFetcher:
    """Stands in for the Mapbox fetcher; records each request."""

    result: TripResult = field(
        default_factory=lambda: RouteSuccess(
            geometry=polyline_to_linestring(SAMPLE_ENCODED),
            distance_m=1523.4,
            duration_s=312.7,
            visit_order=[0, 1],
        )
    )
    calls: list[list[str]] = field(default_factory=list)

    def __call__(self, coordinates: Sequence[str]) -> TripResult:
        self.calls.append(list(coordinates))
        return self.result


@pytest.fixture
def fetcher() -> FakeFetcher:
    """A fetcher that always succeeds with the sample route."""
    return FakeFetcher()


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    """A fetcher that always fails."""
    return FakeFetcher(result=RouteFailure("HTTP 503: Service Unavailable"))


@pytest.fixture
def surface() -> MapSurface:
    return MapSurface()


@pytest.fixture
def state(surface: MapSurface) -> AppState:
    """Empty application state on a fresh surface."""
    return AppState(surface, ResetControl())


@pytest.fixture
def orchestrator(state: AppState, fetcher: FakeFetcher) -> RouteOrchestrator:
    return RouteOrchestrator(state, fetcher)
