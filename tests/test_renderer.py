"""Tests for the dual-surface renderer."""
from dash_nav.core.renderer import FULL_MAP, OVERVIEW_MAP, DualSurfaceRenderer
from dash_nav.core.surfaces import LayerStyle, LayerSurface
from dash_nav.models import Coordinate, Destination
from dash_nav.state import NavigationState

from conftest import SZEGED, make_route

ORIGIN = Coordinate(lat=46.8986, lon=21.3464)


def _setup():
    overview = LayerSurface("overview")
    full_map = LayerSurface("navigation")
    renderer = DualSurfaceRenderer()
    renderer.register(overview, OVERVIEW_MAP)
    renderer.register(full_map, FULL_MAP)
    return renderer, overview, full_map


def _active_state(route=None):
    return NavigationState(
        status="route_active",
        origin=ORIGIN,
        destination=Destination(coordinate=SZEGED, name="Szeged"),
        active_route=route or make_route(),
    )


def _kinds(surface):
    return sorted(layer.kind for layer in surface.layers.values())


def test_active_route_draws_full_map_artifacts():
    renderer, overview, full_map = _setup()
    renderer.render(_active_state())

    assert _kinds(full_map) == ["marker", "marker", "polyline", "polyline"]
    polylines = [l for l in full_map.layers.values() if l.kind == "polyline"]
    # border drawn first, wider and fainter than the route line
    assert polylines[0].style.weight == 10
    assert polylines[0].style.opacity == 0.4
    assert polylines[1].style.weight == 6
    assert full_map.viewport.padding == 50
    assert full_map.viewport.bounds is not None


def test_active_route_draws_thin_line_on_overview():
    renderer, overview, _ = _setup()
    renderer.render(_active_state())

    assert _kinds(overview) == ["polyline"]
    (line,) = overview.layers.values()
    assert line.style.weight == 3
    assert overview.viewport.padding == 20


def test_fit_bounds_covers_route():
    renderer, _, full_map = _setup()
    renderer.render(_active_state())
    south_west, north_east = full_map.viewport.bounds
    assert south_west.lat == 46.25
    assert north_east.lat == 46.8986
    assert south_west.lon == 20.15
    assert north_east.lon == 21.3464


def test_destination_marker_uses_destination_name():
    renderer, _, full_map = _setup()
    renderer.render(_active_state())
    labels = {l.style.label for l in full_map.layers.values() if l.kind == "marker"}
    assert labels == {"Indulás", "Szeged"}


def test_render_is_idempotent():
    renderer, overview, full_map = _setup()
    state = _active_state()
    renderer.render(state)
    once = (overview.snapshot()["layers"], full_map.snapshot()["layers"])
    renderer.render(state)

    assert len(overview.layers) == 1
    assert len(full_map.layers) == 4
    strip = lambda layers: [(l["kind"], l["points"], l["style"]) for l in layers]
    assert strip(overview.snapshot()["layers"]) == strip(once[0])
    assert strip(full_map.snapshot()["layers"]) == strip(once[1])


def test_idle_state_removes_everything_and_centers_on_origin():
    renderer, overview, full_map = _setup()
    renderer.render(_active_state())
    renderer.render(NavigationState(origin=ORIGIN))

    for surface in (overview, full_map):
        assert surface.layers == {}
        assert surface.viewport.center == ORIGIN
        assert surface.viewport.zoom == 13
        assert surface.viewport.bounds is None


def test_replacing_route_leaves_only_new_artifacts():
    renderer, _, full_map = _setup()
    renderer.render(_active_state())
    other_end = Coordinate(lat=46.6778655, lon=21.0898374)
    renderer.render(NavigationState(
        status="route_active",
        origin=ORIGIN,
        destination=Destination(coordinate=other_end, name="Csaba Center"),
        active_route=make_route(end=other_end),
    ))
    assert len(full_map.layers) == 4
    labels = {l.style.label for l in full_map.layers.values() if l.kind == "marker"}
    assert "Szeged" not in labels


def test_foreign_layers_are_left_alone():
    renderer, _, full_map = _setup()
    own_marker = full_map.add_marker(ORIGIN, LayerStyle(label="here"))
    renderer.render(_active_state())
    renderer.clear()
    assert list(full_map.layers) == [own_marker]


def test_surface_count_is_configuration():
    renderer = DualSurfaceRenderer()
    surfaces = [LayerSurface(f"s{i}") for i in range(3)]
    for s in surfaces:
        renderer.register(s)
    renderer.render(_active_state())
    assert all(len(s.layers) == 4 for s in surfaces)
