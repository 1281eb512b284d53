"""Vercel serverless entrypoint for the pfSense assistant relay.

Accepts ``POST {"userPrompt": "..."}``, forwards it to Gemini with the
server-side key, and answers ``{"text": "..."}`` or ``{"error": ..., "details": ...}``.
Run locally with ``python -m api.index``.
"""

from __future__ import annotations

import logging
import os
import sys
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path

from dotenv import load_dotenv

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.models import INTERNAL_SERVER_ERROR, RelayResponse
from core.relay import handle_request

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """Vercel Python serverless function handler."""

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def _send(self, response: RelayResponse, include_body: bool = True) -> None:
        payload = response.encoded_body()
        self.send_response(response.status_code)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if include_body and payload:
            self.wfile.write(payload)

    def _relay(self) -> None:
        try:
            body = self._read_body()
        except ValueError as e:
            logger.warning("Unreadable request body: %s", e)
            self._send(RelayResponse.error(500, INTERNAL_SERVER_ERROR, details=str(e)))
            return
        self._send(handle_request(self.command, body))

    do_POST = _relay
    do_OPTIONS = _relay
    do_GET = _relay
    do_PUT = _relay
    do_PATCH = _relay
    do_DELETE = _relay

    def do_HEAD(self) -> None:
        self._send(handle_request(self.command), include_body=False)

    def log_message(self, format, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def serve(host: str = "127.0.0.1", port: int | None = None) -> None:
    """Serve the handler locally until interrupted, reading .env first."""
    load_dotenv()
    port = port or int(os.environ.get("PORT", "3000"))
    server = HTTPServer((host, port), handler)
    logger.info("Serving pfSense assistant relay on http://%s:%d", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    serve()
