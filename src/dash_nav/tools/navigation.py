"""Navigation tools: search_destination, select_destination, go_to_favorite, clear_route, ..."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..app import NavigationApp
from ..core.maneuvers import ICON_GLYPHS, GENERIC_ICON
from ..errors import InvalidQuery
from ..preview.server import update_preview
from ._prereqs import require_state


def _route_line(app: NavigationApp) -> str:
    s = app.session.state
    return (
        f"Route to {s.destination.name}: {s.summary.distance_label}, "
        f"{s.summary.duration_label} ({len(s.active_route.steps)} steps)."
    )


def _failure_line(app: NavigationApp) -> str:
    s = app.session.state
    line = f"Error: {s.last_error}. {s.notification or ''}".strip()
    if s.has_route:
        line += f" The previous route to {s.destination.name} is still shown."
    return line + " Call retry_last to try again."


async def _refresh_preview(app: NavigationApp) -> None:
    if app.preview_running:
        await update_preview(app)


def register_navigation_tools(mcp: FastMCP, app: NavigationApp):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def search_destination(query: str) -> str:
        """Search for a destination address or place name.

        Searches Hungary first, then worldwide if nothing matches there.
        Returns a numbered candidate list. Present it to the user and wait
        for their choice.
        **Next:** select_destination with the chosen number.

        Args:
            query: Free-text address or place name, at least 3 characters
                (e.g. "Szeged", "Békéscsaba, Andrássy út 37").
        """
        session = app.session
        try:
            candidates = await session.submit_query(query)
        except InvalidQuery:
            return f"Error: {session.state.notification}"

        if not candidates:
            if session.state.status == "error":
                return _failure_line(app)
            return session.state.notification or f"No locations found for '{query}'."

        lines = [f"Found {len(candidates)} location(s) for '{query.strip()}':\n"]
        for i, c in enumerate(candidates, 1):
            lines.append(
                f"{i}. {c.short_name}\n"
                f"   {c.display_name}\n"
                f"   Type: {c.place_type} | {c.coordinate.lat:.5f}, {c.coordinate.lon:.5f}"
            )
        lines.append(
            f"\nAsk the user which number (1–{len(candidates)}) they want, "
            "then call select_destination with that number."
        )
        return "\n".join(lines)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def select_destination(number: int) -> str:
        """Plan a route from the current position to a search result.

        **Requires:** search_destination returned candidates.
        **Next:** get_directions for the turn-by-turn list, or preview.

        Args:
            number: 1-based index of the candidate the user selected.
        """
        state = app.session.state
        try:
            require_state(state, candidates=True)
        except ValueError as e:
            return f"Error: {e}"

        n = len(state.candidates)
        if number < 1 or number > n:
            return f"Error: Invalid selection {number}. Choose a number between 1 and {n}."

        candidate = state.candidates[number - 1]
        if not await app.session.select_candidate(candidate):
            return _failure_line(app)
        await _refresh_preview(app)
        return _route_line(app)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_favorites() -> str:
        """List the saved quick destinations."""
        return "\n".join(
            f"- {f.name} ({f.coordinate.lat:.5f}, {f.coordinate.lon:.5f})"
            for f in app.session.favorites
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def go_to_favorite(name: str) -> str:
        """Plan a route straight to a saved destination, skipping the search.

        Args:
            name: Favorite name as shown by list_favorites (e.g. "Otthon").
        """
        try:
            planned = await app.session.plan_to_favorite(name)
        except ValueError as e:
            return f"Error: {e}"
        if not planned:
            return _failure_line(app)
        await _refresh_preview(app)
        return _route_line(app)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def retry_last() -> str:
        """Repeat the last search or route plan that failed with a network error."""
        session = app.session
        if not session.can_retry:
            return "Nothing to retry."

        ok = await session.retry()
        status = session.state.status
        if status == "error":
            return _failure_line(app)
        if status == "searching":
            return (
                f"Search for '{session.state.last_query}' now has "
                f"{len(session.state.candidates)} result(s). Call select_destination."
            )
        if status == "route_active" and ok:
            await _refresh_preview(app)
            return _route_line(app)
        return session.state.notification or "Nothing found."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    async def clear_route() -> str:
        """Remove the current route from both maps and return to idle."""
        app.session.clear_route()
        await _refresh_preview(app)
        return "Route cleared."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def dismiss_notification() -> str:
        """Dismiss the current user notification."""
        app.session.dismiss_notification()
        return "Notification dismissed."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_directions() -> str:
        """Return the turn-by-turn list for the active route."""
        state = app.session.state
        try:
            require_state(state, route=True)
        except ValueError as e:
            return f"Error: {e}"

        lines = [_route_line(app), ""]
        for i, d in enumerate(state.summary.directions, 1):
            glyph = ICON_GLYPHS.get(d.icon_key, ICON_GLYPHS[GENERIC_ICON])
            distance = f" ({d.distance_label})" if d.distance_label else ""
            lines.append(f"{i}. {glyph} {d.text} — {d.street}{distance}")
        return "\n".join(lines)
