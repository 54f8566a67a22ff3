# regeneration.py

from __future__ import annotations

import time
from email.utils import formatdate
from typing import Callable, Mapping, Optional, Protocol

from .types import Headers, Request, Response

UNCACHEABLE = ("no-store", "no-cache", "private")


class Handler(Protocol):
    def __call__(self, request: Request) -> Response:
        ...


def is_cacheable(response: Response) -> bool:
    directives = (response.headers.get("Cache-Control") or "").lower()
    return 200 <= response.status < 300 and not any(d in directives for d in UNCACHEABLE)


class RegeneratingHandler:
    def __init__(self, inner: Handler, revalidate: int, headers: Headers,
                 clock: Callable[[], float] = time.time):
        self.inner = inner
        self.revalidate = revalidate
        self.headers = headers
        self._clock = clock

    def __call__(self, request: Request) -> Response:
        response = self.inner(request)
        # inner headers win, so error responses keep their no-store
        for name, value in self.headers.items():
            if name not in response.headers:
                response.headers[name] = value
        if self.revalidate > 0 and is_cacheable(response) and "Expires" not in response.headers:
            response.headers["Expires"] = formatdate(self._clock() + self.revalidate, usegmt=True)
        return response


class RegenerationMiddleware:
    """Edge-cache policy: long reuse window plus background revalidation."""

    def __init__(self, revalidate: int, headers: Optional[Mapping[str, str]] = None,
                 clock: Callable[[], float] = time.time):
        self.revalidate = revalidate
        self.headers = headers if isinstance(headers, Headers) else Headers(headers)
        self._clock = clock

    def wrap(self, handler: Handler) -> RegeneratingHandler:
        return RegeneratingHandler(handler, self.revalidate, self.headers, self._clock)
