"""Route Planner - click markers on a map, get an optimized multi-stop route.

Architecture::

    config.py        Settings (env vars / .env via pydantic-settings)
    geometry.py      Encoded polyline <-> GeoJSON LineString
    schemas.py       Markers, route layers, phases
    surface.py       Map surface layer registry + reset control
    state.py         Application state (markers, accumulator, route)
    orchestrator.py  Reacts to "marker created" events, fetches and installs routes
    datasources/     External APIs (Mapbox Optimization)
    renderers/       Pure data -> HTML (planner page, static route map)
    server.py        Local HTTP API the planner page talks to
    flows/           Prefect batch flow (stops in, static route map out)
    services/        Shared HTTP client with retry

Data flow: page click -> server -> orchestrator -> state -> datasource -> state -> page
"""

__version__ = "0.1.0"

from route_planner.config import Settings, get_settings

__all__ = ["Settings", "__version__", "get_settings"]
