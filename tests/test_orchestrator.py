"""
Tests for the route orchestrator (marker events -> route requests).
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from route_planner.config import Settings
from route_planner.datasources.mapbox import RouteFailure, RouteSuccess
from route_planner.orchestrator import RouteOrchestrator
from route_planner.schemas import LatLng, LineStyle, Phase
from route_planner.state import AppState
from tests.conftest import SAMPLE_LNG_LAT, FakeFetcher

STOPS = [(42.378, -71.103), (42.38, -71.1), (42.37, -71.09), (42.36, -71.08)]


def place(orchestrator: RouteOrchestrator, count: int) -> None:
    for lat, lng in STOPS[:count]:
        orchestrator.handle_marker_created(lat, lng)


class TestFirstMarker:
    """One marker never triggers a request."""

    def test_no_request(self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher) -> None:
        place(orchestrator, 1)
        assert fetcher.calls == []

    def test_marker_on_map(self, orchestrator: RouteOrchestrator) -> None:
        marker = orchestrator.handle_marker_created(42.378, -71.103)
        assert orchestrator.state.surface.has_layer(marker.layer_id)
        assert orchestrator.state.phase is Phase.AWAITING_SECOND_MARKER

    def test_reset_control_stays_hidden(self, orchestrator: RouteOrchestrator) -> None:
        place(orchestrator, 1)
        assert orchestrator.state.reset_control.visible is False


class TestSecondMarker:
    """Two markers: exactly one request, route drawn, reset shown."""

    def test_one_request_with_both_points(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher
    ) -> None:
        place(orchestrator, 2)
        assert fetcher.calls == [["-71.103,42.378", "-71.1,42.38"]]

    def test_shows_reset_control(self, orchestrator: RouteOrchestrator) -> None:
        place(orchestrator, 2)
        assert orchestrator.state.reset_control.visible is True
        assert orchestrator.state.phase is Phase.ROUTING

    def test_route_geometry_is_decoded_and_flipped(self, orchestrator: RouteOrchestrator) -> None:
        place(orchestrator, 2)
        route = orchestrator.state.route
        assert route is not None
        assert route.geometry["type"] == "LineString"
        assert route.coordinates == SAMPLE_LNG_LAT
        assert orchestrator.state.surface.has_layer(route.layer_id)

    def test_route_style(self, orchestrator: RouteOrchestrator) -> None:
        place(orchestrator, 2)
        route = orchestrator.state.route
        assert route is not None
        assert route.style == LineStyle(color="#ff7800", weight=5, opacity=0.65)

    def test_trip_summary_carried(self, orchestrator: RouteOrchestrator) -> None:
        place(orchestrator, 2)
        route = orchestrator.state.route
        assert route is not None
        assert route.distance_m == 1523.4
        assert route.duration_s == 312.7


class TestMoreMarkers:
    """Each further marker re-requests over every marker so far."""

    def test_third_marker_uses_full_accumulator(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher
    ) -> None:
        place(orchestrator, 3)
        assert len(fetcher.calls) == 2
        assert fetcher.calls[-1] == ["-71.103,42.378", "-71.1,42.38", "-71.09,42.37"]

    @pytest.mark.parametrize("count", [2, 3, 4])
    def test_request_matches_all_markers(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher, count: int
    ) -> None:
        place(orchestrator, count)
        expected = [f"{lng},{lat}" for lat, lng in STOPS[:count]]
        assert fetcher.calls[-1] == expected
        assert len(fetcher.calls) == count - 1

    def test_reset_control_not_reshown(self, orchestrator: RouteOrchestrator) -> None:
        place(orchestrator, 3)
        assert orchestrator.state.reset_control.changes == 1

    def test_route_replaced(self, orchestrator: RouteOrchestrator) -> None:
        place(orchestrator, 2)
        first = orchestrator.state.route
        place_one = STOPS[2]
        orchestrator.handle_marker_created(*place_one)
        second = orchestrator.state.route

        assert first is not None and second is not None
        assert first is not second
        assert not orchestrator.state.surface.has_layer(first.layer_id)
        assert orchestrator.state.surface.has_layer(second.layer_id)


class TestFailure:
    """Failed fetches keep the previous route and never raise."""

    def test_failure_without_route(self, state: AppState, failing_fetcher: FakeFetcher) -> None:
        orchestrator = RouteOrchestrator(state, failing_fetcher)
        place(orchestrator, 2)

        assert state.route is None
        assert len(state.markers) == 2
        assert state.reset_control.visible is False
        assert state.last_failure == "HTTP 503: Service Unavailable"

    def test_failure_keeps_previous_route(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher
    ) -> None:
        place(orchestrator, 2)
        previous = orchestrator.state.route

        fetcher.result = RouteFailure("timeout")
        orchestrator.handle_marker_created(*STOPS[2])

        assert orchestrator.state.route is previous
        assert previous is not None
        assert orchestrator.state.surface.has_layer(previous.layer_id)
        assert len(orchestrator.state.markers) == 3
        assert orchestrator.state.last_failure == "timeout"

    def test_next_success_clears_failure(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher
    ) -> None:
        fetcher.result = RouteFailure("timeout")
        place(orchestrator, 2)

        fetcher.result = RouteSuccess(geometry={"type": "LineString", "coordinates": []})
        orchestrator.handle_marker_created(*STOPS[2])

        assert orchestrator.state.last_failure is None
        assert orchestrator.state.route is not None
        assert fetcher.calls[-1] == [f"{lng},{lat}" for lat, lng in STOPS[:3]]


class TestPlaceAll:
    """Placing a batch of markers routes once."""

    def test_single_request_over_all(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher
    ) -> None:
        markers = orchestrator.place_all([LatLng(lat=lat, lng=lng) for lat, lng in STOPS])

        assert len(markers) == 4
        assert fetcher.calls == [[f"{lng},{lat}" for lat, lng in STOPS]]
        assert orchestrator.state.phase is Phase.ROUTING
        assert orchestrator.state.route is not None
        assert orchestrator.state.reset_control.visible is True

    def test_one_marker_no_request(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher
    ) -> None:
        orchestrator.place_all([LatLng(lat=42.378, lng=-71.103)])
        assert fetcher.calls == []
        assert orchestrator.state.phase is Phase.AWAITING_SECOND_MARKER

    def test_empty(self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher) -> None:
        assert orchestrator.place_all([]) == []
        assert fetcher.calls == []
        assert orchestrator.state.phase is Phase.AWAITING_FIRST_MARKER


class TestInvalidMarker:
    """Out-of-range positions are rejected before touching state."""

    def test_rejected(self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher) -> None:
        with pytest.raises(ValidationError):
            orchestrator.handle_marker_created(95.0, 0.0)
        assert orchestrator.state.markers == []
        assert fetcher.calls == []


class TestReset:
    """Reset starts a fresh session."""

    def test_reset_then_new_session(
        self, orchestrator: RouteOrchestrator, fetcher: FakeFetcher
    ) -> None:
        place(orchestrator, 3)
        orchestrator.reset()

        state = orchestrator.state
        assert state.markers == []
        assert state.route is None
        assert state.reset_control.visible is False
        assert len(state.surface.layers) == 0

        orchestrator.handle_marker_created(*STOPS[3])
        assert len(fetcher.calls) == 2  # nothing new for the first marker
        orchestrator.handle_marker_created(*STOPS[0])
        assert fetcher.calls[-1] == ["-71.08,42.36", "-71.103,42.378"]

    def test_reset_idempotent(self, orchestrator: RouteOrchestrator) -> None:
        orchestrator.reset()
        orchestrator.reset()
        assert orchestrator.state.phase is Phase.AWAITING_FIRST_MARKER


class TestFromSettings:
    """Wiring from configuration."""

    def test_uses_configured_view(self) -> None:
        settings = Settings(center_lat=45.5, center_lon=-122.6, zoom=11, mapbox_token="pk.x")
        orchestrator = RouteOrchestrator.from_settings(settings)
        assert orchestrator.state.surface.center == (45.5, -122.6)
        assert orchestrator.state.surface.zoom == 11

    def test_fetcher_bound_to_settings(self) -> None:
        settings = Settings(mapbox_token="pk.x", profile="walking")
        orchestrator = RouteOrchestrator.from_settings(settings)
        assert orchestrator.fetch_route.keywords["token"] == "pk.x"  # type: ignore[attr-defined]
        assert orchestrator.fetch_route.keywords["profile"] == "walking"  # type: ignore[attr-defined]
