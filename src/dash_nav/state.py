"""State models for the navigation session and the device location.

`NavigationState` is the single aggregate the rest of the app reads: the
renderer paints from it and the tools report from it. Only
`NavigationSession` writes to it; only `LocationProviderAdapter` writes to
`LocationState`.
"""

from typing import Optional, Literal

from pydantic import BaseModel, Field, ConfigDict

from dash_nav.models import Coordinate, Destination, GeocodeCandidate, Route, RouteSummary

SessionStatus = Literal["idle", "searching", "route_planning", "route_active", "error"]


class LocationState(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    coordinate: Coordinate
    place_name: str = ""
    timezone: str = "UTC"
    has_live_fix: bool = False


class NavigationState(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    status: SessionStatus = "idle"
    origin: Coordinate
    destination: Optional[Destination] = None
    active_route: Optional[Route] = None
    summary: Optional[RouteSummary] = None
    last_error: Optional[str] = None
    candidates: list[GeocodeCandidate] = Field(default_factory=list)
    notification: Optional[str] = None
    last_query: Optional[str] = None
    generation: int = 0

    @property
    def has_route(self) -> bool:
        return self.active_route is not None and self.destination is not None

    def summary_dict(self) -> dict:
        return {
            "status": self.status,
            "origin": {"lat": self.origin.lat, "lon": self.origin.lon},
            "destination": {
                "name": self.destination.name,
                "lat": self.destination.coordinate.lat,
                "lon": self.destination.coordinate.lon,
            } if self.destination else None,
            "route": {
                "distance": self.summary.distance_label,
                "duration": self.summary.duration_label,
                "steps": len(self.active_route.steps),
                "points": len(self.active_route.geometry),
            } if self.active_route and self.summary else None,
            "pending_candidates": len(self.candidates),
            "last_query": self.last_query,
            "last_error": self.last_error,
            "notification": self.notification,
        }


DEFAULT_FAVORITES: list[Destination] = [
    Destination(
        name="Otthon",
        coordinate=Coordinate(lat=46.896278381347656, lon=21.34123420715332),
    ),
    Destination(
        name="Albérlet",
        coordinate=Coordinate(lat=46.245365142822266, lon=20.15741539001465),
    ),
    Destination(
        name="Csaba Center",
        coordinate=Coordinate(lat=46.6778655, lon=21.0898374),
    ),
]
