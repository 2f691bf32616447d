"""
Local HTTP API for the planner page.

Routes:
    GET  /              planner page
    GET  /api/state     current state snapshot
    POST /api/markers   {"lat": ..., "lng": ...} -> snapshot after routing
    POST /api/reset     -> empty snapshot

``HTTPServer`` handles one request at a time, so orchestrator calls (and the
Mapbox request inside them) never interleave.
"""

from __future__ import annotations

import json
import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError

from route_planner.renderers.planner_page import build_planner_page_html

if TYPE_CHECKING:
    from route_planner.orchestrator import RouteOrchestrator

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 16 * 1024


class BadRequest(Exception):
    """Request body the API can't act on."""


class PlannerRequestHandler(BaseHTTPRequestHandler):
    """Serves the planner page and its JSON API for one orchestrator."""

    orchestrator: ClassVar[RouteOrchestrator]
    title: ClassVar[str] = "Route Planner"

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def do_GET(self) -> None:
        state = self.orchestrator.state
        if self.path in ("/", "/index.html"):
            html = build_planner_page_html(state.surface, state.snapshot(), title=self.title)
            self._send(200, html.encode("utf-8"), "text/html; charset=utf-8")
        elif self.path == "/api/state":
            self._send_json(200, state.snapshot())
        else:
            self._send_json(404, {"error": f"not found: {self.path}"})

    def do_POST(self) -> None:
        if self.path == "/api/markers":
            try:
                body = self._read_json()
                lat, lng = body["lat"], body["lng"]
                self.orchestrator.handle_marker_created(lat, lng)
            except (BadRequest, KeyError, TypeError, ValidationError) as exc:
                self._send_json(400, {"error": _describe(exc)})
                return
            self._send_json(200, self.orchestrator.state.snapshot())
        elif self.path == "/api/reset":
            self.orchestrator.reset()
            self._send_json(200, self.orchestrator.state.snapshot())
        else:
            self._send_json(404, {"error": f"not found: {self.path}"})

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _read_json(self) -> dict[str, Any]:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError as exc:
            raise BadRequest("invalid Content-Length") from exc
        if length < 0:
            raise BadRequest("invalid Content-Length")
        if length > MAX_BODY_BYTES:
            raise BadRequest("request body too large")
        raw = self.rfile.read(length) if length else b""
        try:
            body = json.loads(raw or b"{}")
        except ValueError as exc:
            raise BadRequest("body is not valid JSON") from exc
        if not isinstance(body, dict):
            raise BadRequest("body must be a JSON object")
        return body

    def _send_json(self, status: int, payload: dict[str, Any]) -> None:
        self._send(status, json.dumps(payload).encode("utf-8"), "application/json")

    def _send(self, status: int, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


def _describe(exc: Exception) -> str:
    if isinstance(exc, KeyError):
        return f"missing field: {exc.args[0]}"
    if isinstance(exc, ValidationError):
        return "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
    return str(exc)


def make_server(
    orchestrator: RouteOrchestrator,
    host: str = "127.0.0.1",
    port: int = 8000,
    title: str = "Route Planner",
) -> HTTPServer:
    """Build (but don't start) a server bound to one orchestrator."""
    handler = type(
        "BoundPlannerRequestHandler",
        (PlannerRequestHandler,),
        {"orchestrator": orchestrator, "title": title},
    )
    return HTTPServer((host, port), handler)
