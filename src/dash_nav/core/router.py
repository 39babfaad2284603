"""Driving routes from the OSRM HTTP API."""

import logging

import httpx
from pydantic import ValidationError

from dash_nav.config import Settings, settings as default_settings
from dash_nav.errors import NetworkError, RouteNotFound
from dash_nav.models import Coordinate, ManeuverStep, Route

logger = logging.getLogger(__name__)

# OSRM maneuver types without a dedicated kind of their own
_TYPE_ALIASES = {
    "rotary": "roundabout",
    "roundabout turn": "roundabout",
    "exit rotary": "exit roundabout",
    "new name": "continue",
    "use lane": "continue",
}

_KNOWN_TYPES = {
    "depart", "arrive", "turn", "merge", "on ramp", "off ramp", "fork",
    "end of road", "continue", "roundabout", "exit roundabout", "notification",
}


def _parse_step(raw: dict) -> ManeuverStep:
    maneuver = raw.get("maneuver") or {}
    step_type = maneuver.get("type", "continue")
    step_type = _TYPE_ALIASES.get(step_type, step_type)
    if step_type not in _KNOWN_TYPES:
        logger.debug("Unknown OSRM maneuver type %r, treating as continue", step_type)
        step_type = "continue"
    return ManeuverStep(
        type=step_type,
        modifier=maneuver.get("modifier"),
        distance_m=float(raw.get("distance", 0.0)),
        street_name=raw.get("name"),
    )


def parse_route(data: dict) -> Route:
    """Convert the first route of an OSRM response into a Route."""
    if data.get("code") != "Ok" or not data.get("routes"):
        raise RouteNotFound(data.get("message") or f"No route found ({data.get('code')})")

    raw = data["routes"][0]
    try:
        geometry = tuple(
            Coordinate(lat=lat, lon=lon) for lon, lat, *_ in raw["geometry"]["coordinates"]
        )
        legs = raw.get("legs") or [{}]
        steps = tuple(_parse_step(s) for s in legs[0].get("steps", []))
        return Route(
            geometry=geometry,
            total_distance_m=float(raw["distance"]),
            total_duration_s=float(raw["duration"]),
            steps=steps,
        )
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        # pydantic's ValidationError is a ValueError; geometry under 2 points lands here too
        logger.warning("OSRM route could not be parsed: %s", exc)
        raise RouteNotFound("Routing service returned an unusable route") from exc


class RouterClient:
    """Plans a driving route between two coordinates. Never retries."""

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings

    def _url(self, origin: Coordinate, destination: Coordinate) -> str:
        return (
            f"{self.settings.osrm_url}/route/v1/driving/"
            f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
        )

    async def plan_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        """Request the full geometry and step list for origin -> destination.

        Raises:
            RouteNotFound: the service reports no viable path.
            NetworkError: transport failure, timeout or an unexpected HTTP error.
        """
        params = {"overview": "full", "geometries": "geojson", "steps": "true"}
        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout_s,
            headers={"User-Agent": self.settings.user_agent},
        ) as client:
            try:
                response = await client.get(self._url(origin, destination), params=params)
            except httpx.TimeoutException as exc:
                logger.warning("OSRM timed out: %s", exc)
                raise NetworkError("Routing service timed out") from exc
            except httpx.HTTPError as exc:
                logger.warning("OSRM request failed: %s", exc)
                raise NetworkError(f"Routing service unreachable: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("OSRM returned HTTP %s with an undecodable body", response.status_code)
            raise NetworkError("Routing service sent an invalid response") from exc

        # OSRM answers NoRoute/NoSegment with a 400 and a JSON error code
        if response.status_code >= 500 or not isinstance(data, dict) or "code" not in data:
            logger.warning("OSRM returned HTTP %s", response.status_code)
            raise NetworkError(f"Routing service returned HTTP {response.status_code}")

        return parse_route(data)
