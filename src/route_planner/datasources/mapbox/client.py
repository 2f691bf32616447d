"""Mapbox Optimization API constants and URL building.

API docs: https://docs.mapbox.com/api/navigation/optimization-v1/
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

MAPBOX_API = "https://api.mapbox.com"
OPTIMIZATION_PATH = "/optimized-trips/v1/mapbox/{profile}/{coordinates}"

PROFILES = ("driving", "driving-traffic", "walking", "cycling")

# Query parameters sent with every trip request (besides the token)
TRIP_PARAMS = {
    "geometries": "polyline",
    "overview": "full",
}


def build_trip_url(
    coordinates: Sequence[str],
    *,
    profile: str = "driving",
    api_base: str = MAPBOX_API,
) -> str:
    """
    Build the optimized-trips URL for ``lng,lat`` pairs, joined with ``;``.

    Raises:
        ValueError: Unknown profile.
    """
    if profile not in PROFILES:
        raise ValueError(f"Unknown Mapbox profile: {profile!r}")
    path = OPTIMIZATION_PATH.format(profile=profile, coordinates=";".join(coordinates))
    return api_base.rstrip("/") + path
