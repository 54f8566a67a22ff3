"""Local development server: ``python -m trophy_cards --port 8000``."""

from __future__ import annotations

import logging
from http.server import ThreadingHTTPServer

import typer

from .config import Settings
from .pipeline import get_app
from .server import configure_logging, make_handler

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="trophy-cards",
    help="Serve GitHub profile trophy cards locally.",
    add_completion=False,
)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
):
    """Run the card endpoint on a threaded HTTP server."""
    configure_logging(Settings.from_env().log_level)
    get_app()  # build before the first request arrives
    server = ThreadingHTTPServer((host, port), make_handler(get_app))
    logger.info("Serving on http://%s:%d/?username=octocat", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    app()
