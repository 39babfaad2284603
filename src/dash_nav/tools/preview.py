"""Preview tool: launch/refresh the browser map viewer."""

import webbrowser
from mcp.server.fastmcp import FastMCP

from ..app import NavigationApp
from ..preview.server import start_preview_server, update_preview


def register_preview_tools(mcp: FastMCP, app: NavigationApp):

    @mcp.tool()
    async def preview() -> str:
        """Open or refresh the map preview in the browser.

        Shows the overview and navigation maps side by side with the turn list.
        If the preview is already running, it pushes the current maps via WebSocket.
        """
        port = app.settings.preview_http_port
        if not app.preview_running:
            await start_preview_server(app, http_port=port, ws_port=app.settings.preview_ws_port)
            app.preview_running = True
            webbrowser.open(f"http://localhost:{port}")
            return f"Preview opened at http://localhost:{port}"
        else:
            await update_preview(app)
            return f"Preview updated at http://localhost:{port}"
