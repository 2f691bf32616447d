"""Optimized multi-stop trips from the Mapbox Optimization API.

Never raises for network or payload problems: every failure comes back as a
``RouteFailure`` so the caller can keep its current route and move on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests
from pydantic import ValidationError

from route_planner.datasources.mapbox.client import MAPBOX_API, TRIP_PARAMS, build_trip_url
from route_planner.datasources.mapbox.models import (
    OptimizationResponse,
    RouteFailure,
    RouteSuccess,
    TripResult,
)
from route_planner.geometry import polyline_to_linestring
from route_planner.services.http import session

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def _error_detail(resp: requests.Response) -> str:
    """Mapbox puts a human-readable ``message`` in error bodies."""
    try:
        body = resp.json()
    except ValueError:
        return resp.reason or ""
    if isinstance(body, dict):
        return str(body.get("message") or body.get("code") or resp.reason or "")
    return resp.reason or ""


def parse_trip_response(payload: object) -> TripResult:
    """Turn a decoded JSON body into a route (or the reason there isn't one)."""
    try:
        parsed = OptimizationResponse.model_validate(payload)
    except ValidationError as exc:
        return RouteFailure(f"malformed response: {exc.error_count()} validation error(s)")

    if parsed.code != "Ok":
        return RouteFailure(f"{parsed.code}: {parsed.message or 'no message'}")
    if not parsed.trips:
        return RouteFailure("response contained no trips")

    trip = parsed.trips[0]
    try:
        geometry = polyline_to_linestring(trip.geometry)
    except (ValueError, IndexError) as exc:
        return RouteFailure(f"undecodable geometry: {exc}")

    return RouteSuccess(
        geometry=geometry,
        distance_m=trip.distance,
        duration_s=trip.duration,
        visit_order=[w.waypoint_index for w in parsed.waypoints],
    )


def fetch_optimized_route(
    coordinates: Sequence[str],
    *,
    token: str,
    profile: str = "driving",
    api_base: str = MAPBOX_API,
) -> TripResult:
    """
    Request an optimized trip visiting every coordinate.

    Args:
        coordinates: ``lng,lat`` pairs in placement order.
        token: Mapbox access token.
        profile: Routing profile (driving, driving-traffic, walking, cycling).
        api_base: API host, overridable for testing.

    Returns:
        ``RouteSuccess`` with a GeoJSON LineString, or ``RouteFailure``.
    """
    if len(coordinates) < 2:
        return RouteFailure("need at least two coordinates")
    if not token:
        return RouteFailure("no Mapbox access token configured")

    url = build_trip_url(coordinates, profile=profile, api_base=api_base)
    params = {**TRIP_PARAMS, "access_token": token}
    logger.debug("Requesting optimized trip over %d stops", len(coordinates))

    try:
        resp = session.get(url, params=params)
    except requests.RequestException as exc:
        return RouteFailure(f"request failed: {exc.__class__.__name__}")

    if not resp.ok:
        return RouteFailure(f"HTTP {resp.status_code}: {_error_detail(resp)}")

    try:
        payload = resp.json()
    except ValueError:
        return RouteFailure("response was not valid JSON")

    return parse_trip_response(payload)
