"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants
    ├── models.py         # Response models and result types
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Fetch functions go through ``route_planner.services.http.session`` and
return result objects instead of raising on upstream failures.
"""
