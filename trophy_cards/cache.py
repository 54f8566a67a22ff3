"""Vercel KV caching layer for profile data."""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional, Protocol

from upstash_redis import Redis

from .config import Settings

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Opaque string key/value store used for cache-aside lookups."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> bool:
        ...


class MemoryCacheStore:
    """Per-instance cache, cleared on cold start. No TTL enforcement."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def __len__(self) -> int:
        return len(self._data)


class KVCacheStore:
    """Upstash Redis (Vercel KV) backed store.

    Backend failures are logged and reported as a miss or a failed write so a
    flaky cache never takes the card down with it.
    """

    def __init__(self, client: Redis, ttl: Optional[int] = None):
        self._kv = client
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "KVCacheStore":
        return cls(Redis(url=settings.kv_url, token=settings.kv_token), ttl=settings.cache_ttl)

    def get(self, key: str) -> Optional[str]:
        try:
            val = self._kv.get(key)
        except Exception:
            logger.warning("KV read failed for %s", key, exc_info=True)
            return None
        if val is None or isinstance(val, str):
            return val
        # upstash may hand back already-decoded payloads
        return val.decode() if isinstance(val, bytes) else json.dumps(val)

    def set(self, key: str, value: str) -> bool:
        try:
            if self.ttl:
                self._kv.setex(key, self.ttl, value)
            else:
                self._kv.set(key, value)
        except Exception:
            logger.warning("KV write failed for %s", key, exc_info=True)
            return False
        return True


def get_cache_store(settings: Settings) -> CacheStore:
    """KV store when configured, otherwise an in-memory store."""
    if settings.kv_url and settings.kv_token:
        return KVCacheStore.from_settings(settings)
    logger.debug("KV not configured, using in-memory cache")
    return MemoryCacheStore()
