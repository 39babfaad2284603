"""Map surface interface and an in-memory layer surface."""

import itertools
from abc import ABC, abstractmethod
from typing import Literal, Optional

from pydantic import BaseModel, Field

from dash_nav.models import Coordinate


class LayerStyle(BaseModel):
    color: str = "#00d4ff"
    weight: float = 6
    opacity: float = 0.8
    icon: str = ""
    label: str = ""


class Layer(BaseModel):
    handle: int
    kind: Literal["polyline", "marker"]
    points: list[Coordinate]
    style: LayerStyle = Field(default_factory=LayerStyle)


class Viewport(BaseModel):
    center: Optional[Coordinate] = None
    zoom: Optional[int] = None
    bounds: Optional[list[Coordinate]] = None
    padding: int = 0


class MapSurface(ABC):
    """A map rendering target.

    Handles returned by add_* are opaque; the only valid use is passing them
    back to remove_layer on the same surface.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def add_polyline(self, points: list[Coordinate], style: LayerStyle) -> int: ...

    @abstractmethod
    def add_marker(self, point: Coordinate, style: LayerStyle) -> int: ...

    @abstractmethod
    def remove_layer(self, handle: int) -> None: ...

    @abstractmethod
    def fit_bounds(self, points: list[Coordinate], padding: int) -> None: ...

    @abstractmethod
    def set_view(self, point: Coordinate, zoom: int) -> None: ...


class LayerSurface(MapSurface):
    """Surface that keeps its layers and viewport in memory.

    Used directly in tests and as the source of the browser preview, which
    draws whatever `snapshot()` returns.
    """

    def __init__(self, name: str):
        super().__init__(name)
        self.layers: dict[int, Layer] = {}
        self.viewport = Viewport()
        self._handles = itertools.count(1)

    def add_polyline(self, points: list[Coordinate], style: LayerStyle) -> int:
        handle = next(self._handles)
        self.layers[handle] = Layer(handle=handle, kind="polyline", points=list(points), style=style)
        return handle

    def add_marker(self, point: Coordinate, style: LayerStyle) -> int:
        handle = next(self._handles)
        self.layers[handle] = Layer(handle=handle, kind="marker", points=[point], style=style)
        return handle

    def remove_layer(self, handle: int) -> None:
        self.layers.pop(handle, None)

    def fit_bounds(self, points: list[Coordinate], padding: int) -> None:
        lats = [p.lat for p in points]
        lons = [p.lon for p in points]
        south_west = Coordinate(lat=min(lats), lon=min(lons))
        north_east = Coordinate(lat=max(lats), lon=max(lons))
        self.viewport = Viewport(bounds=[south_west, north_east], padding=padding)

    def set_view(self, point: Coordinate, zoom: int) -> None:
        self.viewport = Viewport(center=point, zoom=zoom)

    def snapshot(self) -> dict:
        return {
            "name": self.name,
            "layers": [layer.model_dump() for layer in self.layers.values()],
            "viewport": self.viewport.model_dump(),
        }
