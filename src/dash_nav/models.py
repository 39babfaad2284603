"""Pydantic domain models for coordinates, geocoding results and routes."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ManeuverType = Literal[
    "depart",
    "arrive",
    "turn",
    "merge",
    "on ramp",
    "off ramp",
    "fork",
    "end of road",
    "continue",
    "roundabout",
    "exit roundabout",
    "notification",
]

ManeuverModifier = Literal[
    "left",
    "right",
    "slight left",
    "slight right",
    "sharp left",
    "sharp right",
    "straight",
    "uturn",
]


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class GeocodeCandidate(BaseModel):
    display_name: str
    coordinate: Coordinate
    place_type: str = "unknown"

    @property
    def short_name(self) -> str:
        """First part of the display name, e.g. 'Szeged' for 'Szeged, Csongrád, ...'."""
        return self.display_name.split(",")[0].strip()


class ManeuverStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ManeuverType
    modifier: Optional[ManeuverModifier] = None
    distance_m: float = Field(default=0.0, ge=0)
    street_name: Optional[str] = None

    @field_validator("street_name", mode="before")
    @classmethod
    def blank_street_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Route(BaseModel):
    """Immutable route as returned by the router client."""
    model_config = ConfigDict(frozen=True)

    geometry: tuple[Coordinate, ...] = Field(min_length=2)
    total_distance_m: float = Field(ge=0)
    total_duration_s: float = Field(ge=0)
    steps: tuple[ManeuverStep, ...] = ()


class Destination(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    name: str


class Direction(BaseModel):
    """One row of the turn-by-turn list."""
    text: str
    icon_key: str
    street: str = ""
    distance_label: str = ""


class RouteSummary(BaseModel):
    """Display labels derived from the active route."""
    distance_label: str
    duration_label: str
    directions: list[Direction] = Field(default_factory=list)
