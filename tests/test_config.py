"""
Tests for settings and the planner page renderer.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from route_planner.config import Settings
from route_planner.renderers.planner_page import DRAW_OPTIONS, build_planner_page_html
from route_planner.state import AppState
from route_planner.surface import MapSurface


class TestSettings:
    """Defaults and environment overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ROUTE_PLANNER_MAPBOX_TOKEN", raising=False)
        settings = Settings(_env_file=None)
        assert settings.profile == "driving"
        assert (settings.center_lat, settings.center_lon) == (42.378, -71.103)
        assert settings.zoom == 14
        assert settings.mapbox_token == ""
        assert settings.site_dir == Path("site")

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROUTE_PLANNER_MAPBOX_TOKEN", "pk.from-env")
        monkeypatch.setenv("ROUTE_PLANNER_PROFILE", "cycling")
        monkeypatch.setenv("ROUTE_PLANNER_API_PORT", "9001")
        settings = Settings(_env_file=None)
        assert settings.mapbox_token == "pk.from-env"
        assert settings.profile == "cycling"
        assert settings.api_port == 9001

    def test_rejects_unknown_profile(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, profile="teleport")

    def test_rejects_bad_center(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, center_lat=100.0)


class TestPlannerPage:
    """Interactive page HTML."""

    def test_markers_only_toolbar(self) -> None:
        assert DRAW_OPTIONS["marker"] is True
        assert not any(v for k, v in DRAW_OPTIONS.items() if k != "marker")

    def test_embeds_view_and_state(self) -> None:
        surface = MapSurface(center=(45.5, -122.6), zoom=12)
        html = build_planner_page_html(surface, AppState(surface).snapshot(), title="My Planner")

        assert "<title>My Planner</title>" in html
        assert "[45.5, -122.6]" in html
        assert "basemaps.cartocdn.com" in html
        assert '"awaiting_first_marker"' in html
        assert "/api/markers" in html
        assert "/api/reset" in html

    def test_attribution_is_script_safe(self) -> None:
        """HTML in the attribution can't close the script tag."""
        html = build_planner_page_html(MapSurface(), AppState().snapshot())
        script = html.split("<script>", 1)[1]
        assert "</a>" not in script.split("</script>", 1)[0]
