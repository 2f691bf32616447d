"""Mapbox Optimization data source.

Public API:
  - optimization: fetch_optimized_route, parse_trip_response
  - models: RouteSuccess, RouteFailure, TripResult
  - client: build_trip_url, API constants
"""

from route_planner.datasources.mapbox.client import MAPBOX_API, PROFILES, build_trip_url
from route_planner.datasources.mapbox.models import RouteFailure, RouteSuccess, TripResult
from route_planner.datasources.mapbox.optimization import (
    fetch_optimized_route,
    parse_trip_response,
)

__all__ = [
    "MAPBOX_API",
    "PROFILES",
    "RouteFailure",
    "RouteSuccess",
    "TripResult",
    "build_trip_url",
    "fetch_optimized_route",
    "parse_trip_response",
]
