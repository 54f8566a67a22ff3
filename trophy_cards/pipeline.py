"""Request pipeline: routing, username resolution, cache-aside fetch, rendering."""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable, Mapping, Optional
from urllib.parse import urlsplit

from . import config
from .cache import CacheStore, get_cache_store
from .card import Card
from .errors import DebugContext, ErrorRenderer
from .fetcher import CacheAsideFetcher, UpstreamClient
from .github_client import GithubApiClient
from .negotiation import classify
from .params import RenderParams, parse_params
from .regeneration import RegeneratingHandler, RegenerationMiddleware
from .themes import COLORS, Theme, get_theme
from .types import Err, Headers, Request, Response

logger = logging.getLogger(__name__)

NOT_FOUND_HEADERS = {
    "Content-Type": "text/plain; charset=utf-8",
    "Cache-Control": "no-store",
}


def resolve_username(params: RenderParams, settings: config.Settings) -> Optional[str]:
    if settings.force_default_username and settings.default_username:
        return settings.default_username
    return params.username or settings.default_username


def public_origin(request: Request) -> str:
    """Origin as seen by the caller; proxies report it in x-forwarded-*."""
    url = urlsplit(request.url)
    host = request.headers.get("X-Forwarded-Host") or request.headers.get("Host") or url.netloc or "localhost"
    proto = request.headers.get("X-Forwarded-Proto") or url.scheme or "http"
    return f"{proto.split(',')[0].strip()}://{host.split(',')[0].strip()}"


class RequestPipeline:
    """Turn one inbound request into one response.

    Every collaborator is injected; ``environ`` is re-read on each request so
    deployment settings apply without a restart.
    """

    def __init__(self, cache: CacheStore, client: UpstreamClient,
                 themes: Mapping[str, Theme] = COLORS,
                 environ: Optional[Mapping[str, str]] = None,
                 card_factory: Callable[[RenderParams], Card] = Card,
                 error_renderer: Optional[ErrorRenderer] = None,
                 default_headers: Optional[Mapping[str, str]] = None):
        self.fetcher = CacheAsideFetcher(cache, client)
        self.themes = themes
        self.environ = environ
        self.card_factory = card_factory
        self.errors = error_renderer or ErrorRenderer()
        self.default_headers = dict(default_headers or config.default_headers())

    def settings(self) -> config.Settings:
        return config.Settings.from_env(self.environ)

    def __call__(self, request: Request) -> Response:
        return self.handle(request)

    def handle(self, request: Request) -> Response:
        if request.path not in config.ROOT_PATHS:
            return Response(404, "Not Found", Headers(NOT_FOUND_HEADERS))

        settings = self.settings()
        params = parse_params(request.query)
        username = resolve_username(params, settings)
        if username is None:
            logger.info("Rejecting request without username")
            return self.errors.render_usage(f"{public_origin(request)}/", self.default_headers["Cache-Control"])
        params = params.with_username(username)

        result = self.fetcher.fetch(username)
        if isinstance(result, Err):
            client_type = classify(request.headers)
            debug = DebugContext(username, settings.has_primary_token) if settings.debug else None
            logger.warning("Rendering %s for %s as %s", result.error.name, username, client_type.value)
            return self.errors.render(result.error, client_type, username, debug)

        theme = get_theme(params.theme, self.themes)
        body = self.card_factory(params).render(result.value, theme)
        return Response(200, body, Headers(self.default_headers))


def build_app(environ: Optional[Mapping[str, str]] = None,
              cache: Optional[CacheStore] = None,
              client: Optional[UpstreamClient] = None) -> RegeneratingHandler:
    """Wire the production pipeline behind the regeneration middleware."""
    settings = config.Settings.from_env(environ)
    pipeline = RequestPipeline(
        cache if cache is not None else get_cache_store(settings),
        client if client is not None else GithubApiClient.from_env(environ),
        environ=environ,
    )
    middleware = RegenerationMiddleware(config.REVALIDATE_TIME, config.default_headers())
    return middleware.wrap(pipeline)


_app: Optional[RegeneratingHandler] = None
_app_lock = threading.Lock()


def get_app() -> RegeneratingHandler:
    """Lazily built app shared by the HTTP entry points of one process."""
    global _app
    if _app is None:
        with _app_lock:
            if _app is None:
                _app = build_app(os.environ)
    return _app
