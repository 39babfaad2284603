"""Device location with a static fallback and jitter damping."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol

import httpx

from dash_nav.config import Settings, settings as default_settings
from dash_nav.models import Coordinate
from dash_nav.state import LocationState

logger = logging.getLogger(__name__)

LocationListener = Callable[[LocationState], None]


class LocationSource(Protocol):
    async def get_current_position(self) -> Coordinate: ...


class IpLocationSource:
    """Approximate position from an IP geolocation service (ip-api.com JSON format)."""

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings
        self.timezone: Optional[str] = None

    async def get_current_position(self) -> Coordinate:
        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout_s,
            headers={"User-Agent": self.settings.user_agent},
        ) as client:
            response = await client.get(self.settings.ip_location_url)
            response.raise_for_status()
            data = response.json()
        if data.get("status", "success") != "success":
            raise RuntimeError(f"IP geolocation failed: {data.get('message', 'unknown error')}")
        self.timezone = data.get("timezone") or self.timezone
        return Coordinate(lat=float(data["lat"]), lon=float(data["lon"]))


class LocationProviderAdapter:
    """Serves the best known coordinate and polls the device source.

    Without a source, or while the source keeps failing, the configured
    fallback is served and `has_live_fix` stays False. That is normal
    operation, not an error.
    """

    def __init__(
        self,
        source: Optional[LocationSource] = None,
        settings: Settings = default_settings,
        place_resolver: Optional[Callable[[Coordinate], Awaitable[Optional[str]]]] = None,
    ):
        self.source = source
        self.settings = settings
        self.place_resolver = place_resolver
        self.fallback = Coordinate(lat=settings.fallback_lat, lon=settings.fallback_lon)
        self.state = LocationState(
            coordinate=self.fallback,
            place_name=settings.fallback_place_name,
            timezone=settings.fallback_timezone,
            has_live_fix=False,
        )
        self._listeners: list[LocationListener] = []
        self._task: Optional[asyncio.Task] = None

    def current_coordinate(self) -> Coordinate:
        if self.state.has_live_fix:
            return self.state.coordinate
        return self.fallback

    def on_update(self, callback: LocationListener) -> None:
        self._listeners.append(callback)

    def _moved_enough(self, fix: Coordinate) -> bool:
        if not self.state.has_live_fix:
            return True
        threshold = self.settings.jitter_threshold_deg
        return (
            abs(fix.lat - self.state.coordinate.lat) > threshold
            or abs(fix.lon - self.state.coordinate.lon) > threshold
        )

    async def refresh(self) -> bool:
        """Poll the source once. Returns True when a new fix was accepted."""
        if self.source is None:
            return False
        try:
            fix = await asyncio.wait_for(
                self.source.get_current_position(), self.settings.request_timeout_s
            )
        except Exception as exc:
            logger.debug("Location source unavailable, keeping last position: %s", exc)
            return False

        if not self._moved_enough(fix):
            return False

        self.state.coordinate = fix
        self.state.has_live_fix = True
        timezone = getattr(self.source, "timezone", None)
        if timezone:
            self.state.timezone = timezone
        logger.info("Live fix accepted: %.5f, %.5f", fix.lat, fix.lon)

        if self.place_resolver is not None:
            await self._resolve_place(fix)

        for listener in list(self._listeners):
            listener(self.state)
        return True

    async def _resolve_place(self, fix: Coordinate) -> None:
        try:
            name = await self.place_resolver(fix)
        except Exception as exc:
            logger.warning("Could not resolve place name for %.5f, %.5f: %s", fix.lat, fix.lon, exc)
            return
        if name:
            self.state.place_name = name

    async def _poll(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.settings.location_poll_interval_s)

    async def start(self) -> None:
        """Poll in the background: once right away, then every poll interval."""
        if self._task is None:
            self._task = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
