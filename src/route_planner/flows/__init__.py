"""
Prefect flows.

Flows:
- plan: Optimized route over a fixed list of stops, written as an HTML map

Usage (local):
    python -m route_planner.flows.plan

Usage (CLI):
    route-planner plan --stop 42.3736,-71.1097 --stop 42.3601,-71.0942
"""
