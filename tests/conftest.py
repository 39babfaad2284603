"""Shared fakes for session and tool tests.

The fakes subclass the real clients and only replace the network call, so
query validation and the biased/broad fallback still run for real.
"""
import asyncio

import pytest

from dash_nav.app import NavigationApp
from dash_nav.config import Settings
from dash_nav.core.geocoder import GeocoderClient
from dash_nav.core.router import RouterClient
from dash_nav.models import Coordinate, GeocodeCandidate, ManeuverStep, Route

SZEGED = Coordinate(lat=46.25, lon=20.15)


def make_candidate(name="Szeged, Csongrád-Csanád vármegye, Magyarország", lat=46.25, lon=20.15):
    return GeocodeCandidate(display_name=name, coordinate=Coordinate(lat=lat, lon=lon), place_type="city")


def make_route(distance_m=12300.0, duration_s=840.0, end=SZEGED):
    return Route(
        geometry=(
            Coordinate(lat=46.8986, lon=21.3464),
            Coordinate(lat=46.5, lon=20.8),
            end,
        ),
        total_distance_m=distance_m,
        total_duration_s=duration_s,
        steps=(
            ManeuverStep(type="depart", distance_m=350.0, street_name="Petőfi utca"),
            ManeuverStep(type="turn", modifier="left", distance_m=11900.0, street_name="47-es főút"),
            ManeuverStep(type="arrive", distance_m=0.0, street_name=""),
        ),
    )


class FakeGeocoder(GeocoderClient):
    """Geocoder whose answers are scripted per call.

    `script` items are a list of candidates or an exception instance. A call
    with an entry in `gates` waits for that event first.
    """

    def __init__(self, settings, script=None, gates=None):
        super().__init__(settings)
        self.script = list(script or [])
        self.gates = gates or {}
        self.calls: list[tuple[str, str | None]] = []

    async def _search_once(self, query, country):
        index = len(self.calls)
        self.calls.append((query, country))
        if index in self.gates:
            await self.gates[index].wait()
        outcome = self.script[index] if index < len(self.script) else []
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)

    async def reverse(self, coordinate):
        return "Szeged"


class FakeRouter(RouterClient):
    """Router with scripted outcomes: a Route, an exception, or ('sleep', seconds)."""

    def __init__(self, settings, script=None, gates=None):
        super().__init__(settings)
        self.script = list(script or [])
        self.gates = gates or {}
        self.calls: list[tuple[Coordinate, Coordinate]] = []

    async def plan_route(self, origin, destination):
        index = len(self.calls)
        self.calls.append((origin, destination))
        if index in self.gates:
            await self.gates[index].wait()
        outcome = self.script[index] if index < len(self.script) else make_route(end=destination)
        if isinstance(outcome, tuple) and outcome[0] == "sleep":
            await asyncio.sleep(outcome[1])
            return make_route(end=destination)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def test_settings():
    return Settings(request_timeout_s=0.5, location_poll_interval_s=0.01)


@pytest.fixture
def build_app(test_settings):
    """Return a factory: build_app(geocode=[...], routes=[...], ...) -> NavigationApp."""
    def _build(geocode=None, routes=None, geocode_gates=None, route_gates=None, source=None):
        geocoder = FakeGeocoder(test_settings, geocode, geocode_gates)
        router = FakeRouter(test_settings, routes, route_gates)
        return NavigationApp.create(
            settings=test_settings, source=source, geocoder=geocoder, router=router,
        )
    return _build


@pytest.fixture
def anyio_backend():
    return "asyncio"
