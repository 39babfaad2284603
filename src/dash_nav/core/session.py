"""Navigation session: the state machine behind search, planning and clearing.

Status flow::

    idle --submit_query--> searching --select_candidate--> route_planning --> route_active
                              |                                  |
                              +--NetworkError--> error <---------+
                                                  |
                        submit_query / select_candidate / retry / clear_route

Every operation bumps `state.generation` before awaiting a collaborator.
When the await returns, a result whose generation no longer matches is
dropped: the newest request always wins and late answers are never applied.
"""

import asyncio
import logging
from typing import Optional

from dash_nav.config import Settings, settings as default_settings
from dash_nav.core.formatting import format_distance_km, format_duration, format_step_distance
from dash_nav.core.geocoder import MIN_QUERY_LENGTH, GeocoderClient
from dash_nav.core.location import LocationProviderAdapter
from dash_nav.core.maneuvers import translate
from dash_nav.core.renderer import DualSurfaceRenderer
from dash_nav.core.router import RouterClient
from dash_nav.errors import InvalidQuery, NavigationError, NetworkError, NoResults
from dash_nav.models import Destination, Direction, GeocodeCandidate, Route, RouteSummary
from dash_nav.state import DEFAULT_FAVORITES, LocationState, NavigationState

logger = logging.getLogger(__name__)

MSG_QUERY_TOO_SHORT = "Kérlek adj meg legalább 3 karaktert a kereséshez!"
MSG_NO_RESULTS = "Nem található ilyen cím. Próbálj pontosabb címet!"
MSG_SEARCH_FAILED = "Hiba történt a keresés során!"
MSG_ROUTE_NOT_FOUND = "Nem sikerült útvonalat tervezni ehhez a célhoz!"
MSG_ROUTE_FAILED = "Hiba az útvonal tervezése során!"
ARRIVAL_TEXT = "Megérkezés a célhoz"
UNKNOWN_STREET = "Ismeretlen út"


def summarize_route(route: Route, destination: Destination) -> RouteSummary:
    directions = []
    for step in route.steps:
        instruction = translate(step)
        directions.append(Direction(
            text=instruction.text,
            icon_key=instruction.icon_key,
            street=step.street_name or UNKNOWN_STREET,
            distance_label=format_step_distance(step.distance_m),
        ))
    directions.append(Direction(text=ARRIVAL_TEXT, icon_key="finish", street=destination.name))
    return RouteSummary(
        distance_label=format_distance_km(route.total_distance_m),
        duration_label=format_duration(route.total_duration_s),
        directions=directions,
    )


class NavigationSession:
    """Owns the one NavigationState of the application.

    Collaborator failures are caught here and turned into a status plus a
    `last_error` / `notification`; they never reach the renderer. The only
    exception that escapes is InvalidQuery from `submit_query`, which is a
    caller error raised before any request is made.
    """

    def __init__(
        self,
        geocoder: GeocoderClient,
        router: RouterClient,
        location: LocationProviderAdapter,
        renderer: DualSurfaceRenderer,
        settings: Settings = default_settings,
        favorites: Optional[list[Destination]] = None,
    ):
        self.geocoder = geocoder
        self.router = router
        self.location = location
        self.renderer = renderer
        self.settings = settings
        self.favorites = list(DEFAULT_FAVORITES if favorites is None else favorites)
        self.state = NavigationState(origin=location.current_coordinate())
        # What retry() repeats: ("search", query) or ("plan", destination)
        self._last_failed: Optional[tuple[str, object]] = None
        location.on_update(self.on_location_update)

    def _begin(self, status: str) -> int:
        self.state.generation += 1
        self.state.status = status
        self.state.last_error = None
        self.state.notification = None
        return self.state.generation

    def _is_stale(self, token: int) -> bool:
        if token != self.state.generation:
            logger.debug("Discarding stale result (token %d, current %d)", token, self.state.generation)
            return True
        return False

    def _settle(self, notification: Optional[str] = None) -> None:
        """Return to the resting status for whatever route is still displayed."""
        self.state.status = "route_active" if self.state.has_route else "idle"
        self.state.notification = notification

    def _fail(self, exc: NavigationError, notification: str) -> None:
        self.state.status = "error"
        self.state.last_error = exc.kind
        self.state.notification = notification
        logger.warning("Navigation error %s: %s", exc.kind, exc.message)

    async def _bounded(self, coro):
        try:
            return await asyncio.wait_for(coro, self.settings.request_timeout_s)
        except asyncio.TimeoutError as exc:
            raise NetworkError("Request timed out") from exc

    async def submit_query(self, text: str) -> list[GeocodeCandidate]:
        """Search for a destination. Returns the candidates, or [] on failure.

        Raises:
            InvalidQuery: the query is shorter than 3 characters.
        """
        # Rejected before any state changes, so a pending search or plan stays current
        if len((text or "").strip()) < MIN_QUERY_LENGTH:
            self.state.notification = MSG_QUERY_TOO_SHORT
            raise InvalidQuery(f"Query must be at least {MIN_QUERY_LENGTH} characters")

        token = self._begin("searching")
        self.state.last_query = text
        self.state.candidates = []

        try:
            candidates = await self._bounded(self.geocoder.search(text))
        except NoResults:
            if not self._is_stale(token):
                self._last_failed = None
                self._settle(MSG_NO_RESULTS)
            return []
        except NavigationError as exc:
            if not self._is_stale(token):
                self._last_failed = ("search", text)
                self._fail(exc, MSG_SEARCH_FAILED)
            return []

        if self._is_stale(token):
            return []
        self.state.candidates = candidates
        self._last_failed = None
        logger.info("Search %r returned %d candidate(s)", text.strip(), len(candidates))
        return candidates

    async def select_candidate(self, candidate: GeocodeCandidate) -> bool:
        """Plan a route to a chosen candidate. Returns True when the route is active."""
        return await self.plan_to(Destination(
            coordinate=candidate.coordinate, name=candidate.short_name,
        ))

    async def plan_to(self, destination: Destination) -> bool:
        token = self._begin("route_planning")
        origin = self.location.current_coordinate()
        self.state.origin = origin

        try:
            route = await self._bounded(self.router.plan_route(origin, destination.coordinate))
        except NavigationError as exc:
            if not self._is_stale(token):
                # The attempted destination is dropped; a previous route stays as it was
                self._last_failed = ("plan", destination)
                message = MSG_ROUTE_FAILED if exc.retryable else MSG_ROUTE_NOT_FOUND
                self._fail(exc, message)
            return False

        if self._is_stale(token):
            return False

        self.state.destination = destination
        self.state.active_route = route
        self.state.summary = summarize_route(route, destination)
        self.state.candidates = []
        self.state.status = "route_active"
        self._last_failed = None
        # New artifacts replace the old ones in one synchronous pass
        self.renderer.render(self.state)
        logger.info(
            "Route to %s: %s, %s", destination.name,
            self.state.summary.distance_label, self.state.summary.duration_label,
        )
        return True

    async def plan_to_favorite(self, name: str) -> bool:
        for favorite in self.favorites:
            if favorite.name.lower() == name.strip().lower():
                return await self.plan_to(favorite)
        raise ValueError(
            f"Unknown favorite '{name}'. Choose one of: "
            + ", ".join(f.name for f in self.favorites)
        )

    @property
    def can_retry(self) -> bool:
        return self._last_failed is not None

    async def retry(self) -> bool:
        """Repeat the last failed search or route plan. Returns False if there is none."""
        if self._last_failed is None:
            return False
        action, payload = self._last_failed
        if action == "search":
            return bool(await self.submit_query(payload))
        return await self.plan_to(payload)

    def clear_route(self) -> None:
        """Drop destination, route and any error, and wipe every surface."""
        self.state.generation += 1
        self.state.status = "idle"
        self.state.destination = None
        self.state.active_route = None
        self.state.summary = None
        self.state.candidates = []
        self.state.last_error = None
        self.state.notification = None
        self._last_failed = None
        self.state.origin = self.location.current_coordinate()
        self.renderer.render(self.state)
        logger.info("Route cleared")

    def dismiss_notification(self) -> None:
        self.state.notification = None

    def on_location_update(self, location: LocationState) -> None:
        # Only the next planning cycle uses the new origin
        self.state.origin = location.coordinate
