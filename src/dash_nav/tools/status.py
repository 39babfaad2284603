"""Status tools: get_status, get_location, refresh_location."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..app import NavigationApp


def register_status_tools(mcp: FastMCP, app: NavigationApp):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the navigation session.

        Shows the session status, destination, route labels, pending search
        results and the last error or notification.
        """
        return json.dumps(app.session.state.summary_dict(), indent=2, ensure_ascii=False)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_location() -> str:
        """Return the current position used as the route origin."""
        loc = app.location.state
        coord = app.location.current_coordinate()
        source = "GPS fix" if loc.has_live_fix else "fallback"
        return (
            f"{loc.place_name} ({coord.lat:.5f}, {coord.lon:.5f}), "
            f"timezone {loc.timezone}, source: {source}"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def refresh_location() -> str:
        """Poll the location source now instead of waiting for the next interval."""
        if await app.location.refresh():
            return "Position updated. " + get_location()
        return "Position unchanged. " + get_location()
