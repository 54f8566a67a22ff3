# fetcher.py

from __future__ import annotations

import json
import logging
from typing import Protocol

from .cache import CacheStore
from .config import CACHE_SCHEMA_VERSION
from .types import Ok, ProfileData, Result

logger = logging.getLogger(__name__)


class UpstreamClient(Protocol):
    def fetch_profile(self, username: str) -> Result[ProfileData]:
        ...


def cache_key(username: str, version: str = CACHE_SCHEMA_VERSION) -> str:
    return "-".join([version, username])


def load_entry(raw) -> ProfileData:
    """Decode a cache entry; anything unusable reads as an empty profile."""
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    return value if isinstance(value, dict) else {}


class CacheAsideFetcher:
    """Serve profile data from the cache, falling back to the upstream API.

    Only successful upstream results are written back. Concurrent misses for
    the same user are not coalesced; each one reaches upstream.
    """

    def __init__(self, cache: CacheStore, client: UpstreamClient, version: str = CACHE_SCHEMA_VERSION):
        self.cache = cache
        self.client = client
        self.version = version

    def fetch(self, username: str) -> Result[ProfileData]:
        key = cache_key(username, self.version)
        cached = load_entry(self.cache.get(key))
        if cached:
            logger.debug("Cache hit for %s", key)
            return Ok(cached)

        logger.debug("Cache miss for %s", key)
        result = self.client.fetch_profile(username)
        if isinstance(result, Ok):
            if not self.cache.set(key, json.dumps(result.value)):
                logger.warning("Could not store %s in cache", key)
        return result
