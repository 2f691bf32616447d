"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
import webbrowser
from pathlib import Path

from route_planner import __version__
from route_planner.config import get_settings
from route_planner.flows.plan import plan_route
from route_planner.logging_config import setup_logging
from route_planner.orchestrator import RouteOrchestrator
from route_planner.server import make_server

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="route-planner",
        description="Click markers on a map and get an optimized multi-stop route",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    serve_parser = subparsers.add_parser("serve", help="Run the interactive planner")
    serve_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface to bind (default: host from settings)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )
    serve_parser.add_argument(
        "--open",
        action="store_true",
        help="Open the planner in a browser",
    )

    plan_parser = subparsers.add_parser("plan", help="Plan a route over fixed stops")
    plan_parser.add_argument(
        "--stop",
        dest="stops",
        action="append",
        required=True,
        metavar="LAT,LNG",
        help="Stop position; repeat for each stop (at least two)",
    )
    plan_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output HTML path (default: <site_dir>/route.html)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Profile: {settings.profile}")
    print(f"Mapbox token: {'set' if settings.mapbox_token else 'NOT SET'}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: run the planner until Ctrl+C."""
    settings = get_settings()
    host = args.host or settings.host
    port = args.port if args.port is not None else settings.api_port

    if not settings.mapbox_token:
        logger.warning("ROUTE_PLANNER_MAPBOX_TOKEN is not set; routes will not load")

    orchestrator = RouteOrchestrator.from_settings(settings)
    with make_server(orchestrator, host, port, title=settings.app_name) as server:
        url = f"http://{host}:{server.server_port}/"
        print(f"Planner running on {url} (Ctrl+C to stop)")
        if args.open:
            webbrowser.open(url)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def cmd_plan(args: argparse.Namespace) -> int:
    """Handle the 'plan' command: batch route over --stop positions."""
    try:
        result = plan_route(stops=args.stops, output=args.output)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if "error" in result:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1
    print(f"Route map: {result['output']}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    debug = args.debug or settings.debug
    setup_logging(
        log_dir=settings.log_dir,
        console_level=logging.DEBUG if debug else logging.INFO,
    )

    commands = {
        "info": cmd_info,
        "serve": cmd_serve,
        "plan": cmd_plan,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
