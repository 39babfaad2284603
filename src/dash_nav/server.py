"""MCP server for dash-nav.

Builds the navigation app, registers all tools and runs via stdio transport.
"""

import logging
import sys
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from .app import NavigationApp
from .config import settings
from .tools.navigation import register_navigation_tools
from .tools.preview import register_preview_tools
from .tools.status import register_status_tools

app = NavigationApp.with_ip_location(settings)


@asynccontextmanager
async def lifespan(server: FastMCP):
    await app.start()
    try:
        yield
    finally:
        await app.shutdown()


mcp = FastMCP(
    "dash-nav",
    instructions="In-car navigation: search a destination, plan a route and show it on the dashboard maps",
    lifespan=lifespan,
)

# Register all tool groups
register_navigation_tools(mcp, app)
register_status_tools(mcp, app)
register_preview_tools(mcp, app)


def main():
    # stdout carries the MCP protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
