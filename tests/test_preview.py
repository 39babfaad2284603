"""Tests for the map preview payload and tool."""
import json
import pytest
from unittest.mock import patch, AsyncMock, MagicMock

from conftest import make_candidate


def test_app_to_json_idle(build_app):
    from dash_nav.preview.server import _app_to_json
    data = json.loads(_app_to_json(build_app()))
    assert data["status"] == "idle"
    assert data["summary"] is None
    assert [s["name"] for s in data["surfaces"]] == ["overview", "navigation"]
    for surface in data["surfaces"]:
        assert surface["layers"] == []
        assert surface["viewport"]["zoom"] == 13


@pytest.mark.anyio
async def test_app_to_json_with_route(build_app):
    from dash_nav.preview.server import _app_to_json
    app = build_app(geocode=[[make_candidate()]])
    await app.session.submit_query("Szeged")
    await app.session.select_candidate(app.session.state.candidates[0])

    data = json.loads(_app_to_json(app))
    overview, navigation = data["surfaces"]
    assert len(overview["layers"]) == 1
    assert len(navigation["layers"]) == 4
    assert data["summary"]["distance_label"] == "12.3 km"


def _get_preview_tool(app):
    from dash_nav.tools.preview import register_preview_tools
    tools = {}
    mock_mcp = MagicMock()
    def capture():
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    register_preview_tools(mock_mcp, app)
    return tools["preview"]


@pytest.mark.anyio
async def test_preview_starts_once_then_updates(build_app):
    app = build_app()
    preview = _get_preview_tool(app)
    with patch("dash_nav.tools.preview.start_preview_server", new=AsyncMock()) as start, \
            patch("dash_nav.tools.preview.update_preview", new=AsyncMock()) as update, \
            patch("dash_nav.tools.preview.webbrowser.open") as browser:
        first = await preview()
        second = await preview()

    assert "opened" in first
    assert "updated" in second
    start.assert_awaited_once()
    update.assert_awaited_once()
    browser.assert_called_once_with("http://localhost:3333")
    assert app.preview_running is True


@pytest.mark.anyio
async def test_stop_preview_server_when_never_started():
    from dash_nav.preview.server import stop_preview_server
    # Should not raise
    await stop_preview_server()


@pytest.mark.anyio
async def test_shutdown_stops_running_preview(build_app):
    app = build_app()
    app.preview_running = True
    with patch("dash_nav.app.stop_preview_server", new=AsyncMock()) as stop:
        await app.shutdown()
    stop.assert_awaited_once()
    assert app.preview_running is False


def test_configured_zoom_reaches_both_surfaces(build_app, test_settings):
    from dash_nav.preview.server import _app_to_json
    test_settings.default_zoom = 15
    data = json.loads(_app_to_json(build_app()))
    assert [s["viewport"]["zoom"] for s in data["surfaces"]] == [15, 15]
