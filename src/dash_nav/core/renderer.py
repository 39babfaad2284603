"""Paints the navigation state onto every registered map surface."""

import logging

from pydantic import BaseModel

from dash_nav.core.surfaces import LayerStyle, MapSurface
from dash_nav.state import NavigationState

logger = logging.getLogger(__name__)


class SurfaceProfile(BaseModel):
    """How much of the route a surface shows."""
    route_weight: float = 6
    route_color: str = "#00d4ff"
    route_opacity: float = 0.8
    draw_border: bool = True
    draw_markers: bool = True
    padding: int = 50
    zoom: int = 13


FULL_MAP = SurfaceProfile()
OVERVIEW_MAP = SurfaceProfile(route_weight=3, draw_border=False, draw_markers=False, padding=20)

BORDER_STYLE = LayerStyle(color="#0066aa", weight=10, opacity=0.4)


class DualSurfaceRenderer:
    """Sole writer of route artifacts on map surfaces.

    `render` always removes what it drew last time before drawing again, so
    rendering the same state twice leaves the same layers behind.
    """

    def __init__(self):
        self._surfaces: list[tuple[MapSurface, SurfaceProfile]] = []
        self._drawn: dict[int, list[int]] = {}

    @property
    def surfaces(self) -> list[MapSurface]:
        return [surface for surface, _ in self._surfaces]

    def register(self, surface: MapSurface, profile: SurfaceProfile = FULL_MAP) -> None:
        self._surfaces.append((surface, profile))
        self._drawn[id(surface)] = []

    def clear(self) -> None:
        for surface, _ in self._surfaces:
            for handle in self._drawn[id(surface)]:
                surface.remove_layer(handle)
            self._drawn[id(surface)] = []

    def render(self, state: NavigationState) -> None:
        self.clear()

        if not state.has_route:
            for surface, profile in self._surfaces:
                surface.set_view(state.origin, profile.zoom)
            logger.debug("Rendered empty map on %d surface(s)", len(self._surfaces))
            return

        route = state.active_route
        points = list(route.geometry)
        for surface, profile in self._surfaces:
            drawn = self._drawn[id(surface)]
            # Border first so the route line sits on top of it
            if profile.draw_border:
                drawn.append(surface.add_polyline(points, BORDER_STYLE))
            drawn.append(surface.add_polyline(points, LayerStyle(
                color=profile.route_color,
                weight=profile.route_weight,
                opacity=profile.route_opacity,
            )))
            if profile.draw_markers:
                drawn.append(surface.add_marker(
                    points[0], LayerStyle(icon="car", label="Indulás"),
                ))
                drawn.append(surface.add_marker(
                    state.destination.coordinate,
                    LayerStyle(icon="finish", label=state.destination.name),
                ))
            surface.fit_bounds(points, profile.padding)

        logger.debug("Rendered route to %s on %d surface(s)",
                     state.destination.name, len(self._surfaces))
