"""Public entry point: cached Tenor search with synthetic fallback."""

from __future__ import annotations

import logging

import httpx

from gifcache import cache
from gifcache.config import config
from gifcache.models.gifs import GifResult
from gifcache.settings import SettingsStore
from gifcache.tenor import fetch_live

log = logging.getLogger(__name__)


async def search(
    query: str,
    limit: int | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    settings: SettingsStore | None = None,
    cache_store: cache.CacheStore | None = None,
) -> list[GifResult]:
    """Return up to *limit* GIFs for *query*.

    Serves the cached list when one exists, otherwise queries Tenor and caches
    the answer.  Provider and cache failures never propagate: the caller gets
    live, cached, or synthetic results.  Blank queries return ``[]`` without
    touching the cache or network.

    The keyword arguments override the global collaborators, mainly for tests
    and embedding applications.
    """
    if not query or not query.strip():
        return []

    if limit is None:
        limit = config.tenor.default_limit
    elif limit < 1:
        log.warning("Ignoring non-positive limit %d; using %d", limit, config.tenor.default_limit)
        limit = config.tenor.default_limit

    cached = await cache.lookup(query, backend=cache_store)
    if cached is not None:
        return cached

    log.debug("Cache miss for %r", query)
    return await fetch_live(
        query, limit, client=client, settings=settings, cache_store=cache_store
    )
