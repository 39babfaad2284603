"""Application context: builds the collaborators once and wires them together."""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

from dash_nav.config import Settings, settings as default_settings
from dash_nav.core.geocoder import GeocoderClient
from dash_nav.core.location import IpLocationSource, LocationProviderAdapter, LocationSource
from dash_nav.core.renderer import FULL_MAP, OVERVIEW_MAP, DualSurfaceRenderer
from dash_nav.core.router import RouterClient
from dash_nav.core.session import NavigationSession
from dash_nav.core.surfaces import LayerSurface
from dash_nav.preview.server import stop_preview_server

logger = logging.getLogger(__name__)


class NavigationApp(BaseModel):
    """Everything one running dashboard needs, passed explicitly to the tool layer."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    settings: Settings
    location: LocationProviderAdapter
    session: NavigationSession
    renderer: DualSurfaceRenderer
    overview: LayerSurface
    full_map: LayerSurface
    preview_running: bool = False

    @classmethod
    def create(
        cls,
        settings: Settings = default_settings,
        source: Optional[LocationSource] = None,
        geocoder: Optional[GeocoderClient] = None,
        router: Optional[RouterClient] = None,
    ) -> "NavigationApp":
        geocoder = geocoder or GeocoderClient(settings)
        router = router or RouterClient(settings)
        location = LocationProviderAdapter(
            source=source, settings=settings, place_resolver=geocoder.reverse,
        )

        overview = LayerSurface("overview")
        full_map = LayerSurface("navigation")
        renderer = DualSurfaceRenderer()
        zoom = {"zoom": settings.default_zoom}
        renderer.register(overview, OVERVIEW_MAP.model_copy(update=zoom))
        renderer.register(full_map, FULL_MAP.model_copy(update=zoom))

        session = NavigationSession(
            geocoder=geocoder,
            router=router,
            location=location,
            renderer=renderer,
            settings=settings,
        )
        renderer.render(session.state)
        logger.info("Navigation app created with %d surface(s)", len(renderer.surfaces))
        return cls(
            settings=settings,
            location=location,
            session=session,
            renderer=renderer,
            overview=overview,
            full_map=full_map,
        )

    @classmethod
    def with_ip_location(cls, settings: Settings = default_settings) -> "NavigationApp":
        return cls.create(settings=settings, source=IpLocationSource(settings))

    async def start(self) -> None:
        await self.location.start()

    async def shutdown(self) -> None:
        await self.location.stop()
        if self.preview_running:
            await stop_preview_server()
            self.preview_running = False
