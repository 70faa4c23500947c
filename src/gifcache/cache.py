"""Cache-aside storage for search results.

Results are stored as a JSON array under ``<prefix><encoded query>`` and expire
after ``config.cache.ttl_seconds``.  Caching is best effort: every read or
write failure is logged and swallowed here, so the caller only ever sees a hit
or a miss.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol
from urllib.parse import quote

from pydantic import ValidationError

from gifcache.config import config
from gifcache.models.gifs import GifResult, GifResultList

log = logging.getLogger(__name__)

_backend: CacheStore | None = None

# Characters encodeURIComponent leaves alone besides letters and digits.
_URI_COMPONENT_SAFE = "-_.!~*'()"


# ---------------------------------------------------------------------------
# Store backends
# ---------------------------------------------------------------------------

class CacheStore(Protocol):
    """Protocol for key-value stores holding string values."""

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def expire(self, key: str, ttl_seconds: int) -> None:
        ...


class MemoryCacheStore:
    """In-process store with per-key expiry, for single-process deployments."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        # key -> (value, expiry on self._clock or None)
        self._data: dict[str, tuple[str, float | None]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str) -> None:
        self._purge_expired()
        # A plain set clears any previous expiry, as in Redis.
        self._data[key] = (value, None)

    async def expire(self, key: str, ttl_seconds: int) -> None:
        entry = self._data.get(key)
        if entry is None:
            return
        self._data[key] = (entry[0], self._clock() + ttl_seconds)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [k for k, (_, exp) in self._data.items() if exp is not None and exp <= now]
        for k in expired:
            del self._data[k]


class RedisCacheStore:
    """Store entries in Redis; expiry is handled by the server."""

    def __init__(self, redis_url: str) -> None:
        import redis.asyncio as redis

        self.redis_url = redis_url
        self._redis = redis.from_url(redis_url, encoding="utf-8", decode_responses=True)

    async def get(self, key: str) -> str | None:
        return await self._redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def expire(self, key: str, ttl_seconds: int) -> None:
        await self._redis.expire(key, ttl_seconds)

    async def close(self) -> None:
        await self._redis.aclose()


def init_cache_store(backend: CacheStore | None = None) -> CacheStore:
    """Initialize the global cache store from config or an explicit backend."""
    global _backend
    if backend is not None:
        _backend = backend
        return _backend

    if config.cache.backend == "redis":
        _backend = RedisCacheStore(config.cache.redis_url)
    else:
        _backend = MemoryCacheStore()
    return _backend


def get_cache_store() -> CacheStore:
    """Return the current cache store, creating the configured one on first use."""
    if _backend is None:
        return init_cache_store()
    return _backend


def reset() -> None:
    global _backend
    _backend = None


# ---------------------------------------------------------------------------
# Cache adapter
# ---------------------------------------------------------------------------

def cache_key(query: str) -> str:
    """Namespaced key for *query*; case and surrounding whitespace are ignored."""
    return config.cache.prefix + quote(query.strip().lower(), safe=_URI_COMPONENT_SAFE)


async def lookup(query: str, backend: CacheStore | None = None) -> list[GifResult] | None:
    """Return cached results for *query*, or None on a miss or any cache failure."""
    try:
        backend = backend if backend is not None else get_cache_store()
        key = cache_key(query)
        raw = await backend.get(key)
    except Exception:
        log.warning("Cache read failed for %r", query, exc_info=True)
        return None
    if not raw:
        return None
    try:
        results = GifResultList.validate_json(raw)
    except (ValidationError, ValueError):
        log.warning("Discarding unreadable cache entry %s", key, exc_info=True)
        return None
    log.debug("Cache hit for %s (%d results)", key, len(results))
    return results


async def store(query: str, results: list[GifResult], backend: CacheStore | None = None) -> None:
    """Write *results* under the key for *query* and set its TTL.  Never raises."""
    try:
        backend = backend if backend is not None else get_cache_store()
        key = cache_key(query)
        payload = GifResultList.dump_json(results).decode()
        await backend.set(key, payload)
        await backend.expire(key, config.cache.ttl_seconds)
    except Exception:
        log.warning("Cache write failed for %r", query, exc_info=True)
        return
    log.debug("Cached %d results under %s", len(results), key)
