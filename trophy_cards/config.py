# config.py

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

# --- CACHE / RENDER CONSTANTS ---
CACHE_SCHEMA_VERSION = "v1"
CACHE_MAX_AGE = 7200          # 2 hours
CDN_CACHE_MAX_AGE = 28800     # 8 hours
STALE_WHILE_REVALIDATE = 86400  # 24 hours
REVALIDATE_TIME = 3600        # 1 hour

DEFAULT_MAX_ROW = 3
DEFAULT_MAX_COLUMN = 8
DEFAULT_PANEL_SIZE = 110
DEFAULT_MARGIN_W = 0
DEFAULT_MARGIN_H = 0
DEFAULT_NO_BACKGROUND = False
DEFAULT_NO_FRAME = False
DEFAULT_THEME = "default"

DEFAULT_API_TIMEOUT = 10.0

ROOT_PATHS = frozenset({"/", "/api", "/api/"})


def cache_control_header(max_age: int = CACHE_MAX_AGE,
                         cdn_max_age: int = CDN_CACHE_MAX_AGE,
                         stale_while_revalidate: int = STALE_WHILE_REVALIDATE) -> str:
    return ", ".join([
        "public",
        f"max-age={max_age}",
        f"s-maxage={cdn_max_age}",
        f"stale-while-revalidate={stale_while_revalidate}",
    ])


def default_headers() -> dict[str, str]:
    return {
        "Content-Type": "image/svg+xml",
        "Cache-Control": cache_control_header(),
    }


def is_true(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Environment driven settings, read once per request."""

    debug: bool = False
    default_username: Optional[str] = None
    force_default_username: bool = False
    primary_token: Optional[str] = None
    github_tokens: Tuple[str, ...] = ()
    api_timeout: float = DEFAULT_API_TIMEOUT
    kv_url: Optional[str] = None
    kv_token: Optional[str] = None
    cache_ttl: Optional[int] = None
    log_level: str = "INFO"

    @property
    def has_primary_token(self) -> bool:
        return bool(self.primary_token)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        tokens = tuple(
            token for token in (
                (env.get("GITHUB_TOKEN1") or "").strip(),
                (env.get("GITHUB_TOKEN2") or "").strip(),
            ) if token
        )

        try:
            timeout = float(env.get("GITHUB_API_TIMEOUT") or DEFAULT_API_TIMEOUT)
        except ValueError:
            timeout = DEFAULT_API_TIMEOUT

        try:
            ttl = int(env["CACHE_TTL"]) if env.get("CACHE_TTL") else None
        except ValueError:
            ttl = None

        return cls(
            debug=is_true(env.get("DEBUG")),
            default_username=(env.get("DEFAULT_USERNAME") or "").strip() or None,
            force_default_username=is_true(env.get("FORCE_DEFAULT_USERNAME")),
            primary_token=(env.get("GITHUB_TOKEN1") or "").strip() or None,
            github_tokens=tokens,
            api_timeout=timeout,
            kv_url=env.get("KV_REST_API_URL") or None,
            kv_token=env.get("KV_REST_API_TOKEN") or None,
            cache_ttl=ttl if ttl and ttl > 0 else None,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
