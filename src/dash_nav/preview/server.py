"""Dashboard preview: serves viewer.html and pushes both map surfaces over WebSocket."""

import asyncio
import json
import logging
import os
from http.server import HTTPServer, SimpleHTTPRequestHandler
from threading import Thread

import websockets

logger = logging.getLogger(__name__)

_ws_clients: set = set()
_http_server: HTTPServer | None = None
_ws_server = None

VIEWER_HTML = os.path.join(os.path.dirname(__file__), "viewer.html")


class PreviewHandler(SimpleHTTPRequestHandler):
    def do_GET(self):
        if self.path not in ("/", "/index.html"):
            self.send_error(404)
            return
        with open(VIEWER_HTML, "rb") as f:
            body = f.read()
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.debug("preview http: " + format, *args)


def _app_to_json(app) -> str:
    """Serialize every map surface plus the turn list for the viewer."""
    state = app.session.state
    data = {
        "status": state.status,
        "notification": state.notification,
        "surfaces": [surface.snapshot() for surface in app.renderer.surfaces],
        "summary": state.summary.model_dump() if state.summary else None,
    }
    return json.dumps(data, ensure_ascii=False)


async def _ws_handler(websocket):
    _ws_clients.add(websocket)
    logger.debug("Preview client connected (%d open)", len(_ws_clients))
    try:
        await websocket.wait_closed()
    finally:
        _ws_clients.discard(websocket)


async def start_preview_server(app, http_port: int = 3333, ws_port: int = 3334):
    """Start the HTTP page server in a thread and the WebSocket server on this loop."""
    global _http_server, _ws_server

    _http_server = HTTPServer(("localhost", http_port), PreviewHandler)
    Thread(target=_http_server.serve_forever, daemon=True).start()
    _ws_server = await websockets.serve(_ws_handler, "localhost", ws_port)
    logger.info("Preview serving on http://localhost:%d (ws %d)", http_port, ws_port)

    # The browser connects a moment after the page loads
    asyncio.get_running_loop().call_later(1.0, lambda: asyncio.ensure_future(update_preview(app)))


async def update_preview(app):
    """Push the current surfaces to every connected viewer."""
    if not _ws_clients:
        return

    data = _app_to_json(app)
    clients = list(_ws_clients)
    results = await asyncio.gather(
        *[client.send(data) for client in clients],
        return_exceptions=True,
    )
    for client, result in zip(clients, results):
        if isinstance(result, Exception):
            logger.debug("Dropping preview client after send failure: %s", result)
            _ws_clients.discard(client)


async def stop_preview_server():
    """Shut both servers down. Safe to call when the preview never started."""
    global _http_server, _ws_server

    if _ws_server is not None:
        _ws_server.close()
        await _ws_server.wait_closed()
        _ws_server = None
    if _http_server is not None:
        _http_server.shutdown()
        _http_server.server_close()
        _http_server = None
    _ws_clients.clear()
