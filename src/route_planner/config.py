"""
Application settings.

Values come from ``ROUTE_PLANNER_*`` environment variables or a local ``.env``
file. The Mapbox token is the only setting without a usable default::

    export ROUTE_PLANNER_MAPBOX_TOKEN=pk.eyJ1Ijo...
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CARTO_LIGHT_TILES = "https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}.png"
CARTO_ATTRIBUTION = (
    'Map tiles by <a href="https://carto.com/attributions">CARTO</a>, '
    "Map data &copy; "
    '<a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)


class Settings(BaseSettings):
    """Runtime configuration for the planner."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_PLANNER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "route-planner"
    app_env: str = "development"
    debug: bool = False

    # Mapbox Optimization API
    mapbox_token: str = ""
    mapbox_api: str = "https://api.mapbox.com"
    profile: str = Field(default="driving", pattern=r"^(driving|driving-traffic|walking|cycling)$")

    # Initial map view (Cambridge, MA)
    center_lat: float = Field(default=42.378, ge=-90, le=90)
    center_lon: float = Field(default=-71.103, ge=-180, le=180)
    zoom: int = Field(default=14, ge=0, le=22)

    # Basemap
    tile_url: str = CARTO_LIGHT_TILES
    tile_attribution: str = CARTO_ATTRIBUTION
    tile_subdomains: str = "abcd"

    # Local server and output
    host: str = "127.0.0.1"
    api_port: int = 8000
    site_dir: Path = Path("site")
    log_dir: Path = Path("logs")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
