# server.py

from __future__ import annotations

import logging
from http.server import BaseHTTPRequestHandler
from typing import Callable, Optional
from urllib.parse import parse_qs, urlsplit

from .types import Headers, Request, Response

logger = logging.getLogger(__name__)


def to_request(handler: BaseHTTPRequestHandler) -> Request:
    parts = urlsplit(handler.path)
    host = handler.headers.get("Host", "localhost")
    return Request(
        path=parts.path or "/",
        query=parse_qs(parts.query, keep_blank_values=True),
        headers=Headers(dict(handler.headers.items())),
        url=f"http://{host}{handler.path}",
    )


def write_response(handler: BaseHTTPRequestHandler, response: Response) -> None:
    payload = response.body.encode()
    handler.send_response(response.status)
    for name, value in response.headers.items():
        handler.send_header(name, value)
    handler.send_header("Content-Length", str(len(payload)))
    handler.end_headers()
    if handler.command != "HEAD":
        handler.wfile.write(payload)


def respond(handler: BaseHTTPRequestHandler, app: Callable[[Request], Response]) -> None:
    """Run ``app`` for the request held by ``handler``."""
    try:
        response = app(to_request(handler))
    except Exception:
        logger.exception("Unhandled error for %s", handler.path)
        response = Response(500, "Internal Server Error", Headers({
            "Content-Type": "text/plain; charset=utf-8",
            "Cache-Control": "no-store",
        }))
    write_response(handler, response)


def make_handler(app_factory: Callable[[], Callable[[Request], Response]]):
    class handler(BaseHTTPRequestHandler):
        def do_GET(self):
            respond(self, app_factory())

        def do_HEAD(self):
            respond(self, app_factory())

    return handler


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
