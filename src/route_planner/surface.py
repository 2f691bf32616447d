"""
Map surface and reset control.

``MapSurface`` mirrors what the Leaflet map in the browser is showing: its view
configuration plus every layer currently added, keyed by a stamped id the way
``L.stamp`` hands them out. The page redraws itself from this registry.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from route_planner.config import CARTO_ATTRIBUTION, CARTO_LIGHT_TILES

if TYPE_CHECKING:
    from collections.abc import Mapping

    from route_planner.config import Settings
    from route_planner.schemas import Marker, RouteLayer

    Layer = Marker | RouteLayer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TileLayer:
    """Background basemap."""

    url: str = CARTO_LIGHT_TILES
    attribution: str = CARTO_ATTRIBUTION
    subdomains: str = "abcd"


@dataclass
class MapSurface:
    """View configuration and the layers on the map."""

    center: tuple[float, float] = (42.378, -71.103)
    zoom: int = 14
    tiles: TileLayer = field(default_factory=TileLayer)
    _layers: dict[int, Layer] = field(default_factory=dict, init=False, repr=False)
    _ids: itertools.count[int] = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> MapSurface:
        """Build a surface from the configured view and basemap."""
        return cls(
            center=(settings.center_lat, settings.center_lon),
            zoom=settings.zoom,
            tiles=TileLayer(
                url=settings.tile_url,
                attribution=settings.tile_attribution,
                subdomains=settings.tile_subdomains,
            ),
        )

    @property
    def layers(self) -> Mapping[int, Layer]:
        """Read-only view of the layers on the map, by id."""
        return MappingProxyType(self._layers)

    def add_layer(self, layer: Layer) -> int:
        """Add a layer and stamp it with a fresh id."""
        layer_id = next(self._ids)
        layer.layer_id = layer_id
        self._layers[layer_id] = layer
        logger.debug("Added %s layer %d", type(layer).__name__, layer_id)
        return layer_id

    def remove_layer(self, layer_id: int | None) -> None:
        """Remove a layer by id. Unknown ids are ignored."""
        if layer_id is not None and self._layers.pop(layer_id, None) is not None:
            logger.debug("Removed layer %d", layer_id)

    def has_layer(self, layer_id: int | None) -> bool:
        return layer_id in self._layers


@dataclass
class ResetControl:
    """The "Reset Map" button. Hidden until the first route is drawn."""

    visible: bool = False
    changes: int = 0

    def show(self) -> None:
        if not self.visible:
            self.visible = True
            self.changes += 1

    def hide(self) -> None:
        if self.visible:
            self.visible = False
            self.changes += 1
