"""
Encoded polyline <-> GeoJSON conversion.

Mapbox returns trip geometry as a Google encoded polyline (precision 5) with
points in ``(lat, lng)`` order. GeoJSON and ``L.geoJSON`` want ``[lng, lat]``,
so every decoded pair is flipped.

Example:
    >>> decode_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@")
    [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import polyline

if TYPE_CHECKING:
    from collections.abc import Sequence

POLYLINE_PRECISION = 5


def decode_polyline(encoded: str, precision: int = POLYLINE_PRECISION) -> list[tuple[float, float]]:
    """Decode an encoded polyline into ``(lat, lng)`` points."""
    return [(lat, lng) for lat, lng in polyline.decode(encoded, precision)]


def to_linestring(points: Sequence[tuple[float, float]]) -> dict[str, Any]:
    """Wrap ``(lat, lng)`` points as a GeoJSON LineString (``[lng, lat]``)."""
    return {
        "type": "LineString",
        "coordinates": [[lng, lat] for lat, lng in points],
    }


def polyline_to_linestring(encoded: str, precision: int = POLYLINE_PRECISION) -> dict[str, Any]:
    """Decode an encoded polyline straight to a GeoJSON LineString."""
    return to_linestring(decode_polyline(encoded, precision))
