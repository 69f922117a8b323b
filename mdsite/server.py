"""Static HTTP server over a generated html_output/ tree."""

from __future__ import annotations

import logging
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

logger = logging.getLogger(__name__)


class SiteRequestHandler(SimpleHTTPRequestHandler):
    """Serves files from the output directory; ``/`` resolves to index.html."""

    def log_message(self, format: str, *args) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


def create_server(output_dir: Path, host: str = "127.0.0.1", port: int = 8080) -> ThreadingHTTPServer:
    """Bind a server rooted at *output_dir*. Call ``serve_forever()`` to run it."""
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        raise FileNotFoundError(f"Output directory not found: {output_dir}")
    handler = partial(SiteRequestHandler, directory=str(output_dir))
    server = ThreadingHTTPServer((host, port), handler)
    logger.info("serving %s at http://%s:%d", output_dir, host, server.server_address[1])
    return server
