"""Tenor v2 search client.

``fetch_live`` is the live half of the cache-aside flow: it looks up the API
key, queries Tenor, normalizes the results, and writes them back to the cache.
Every failure on the way (missing key, transport error, non-2xx status,
unexpected body) ends in ``fallback.synthesize`` rather than an exception.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from gifcache import cache, fallback
from gifcache.config import config
from gifcache.errors import CredentialMissing, TenorHTTPError, TenorResponseError
from gifcache.models.gifs import REQUIRED_FORMATS, GifResult, placeholder_variant
from gifcache.settings import SettingsStore, get_settings_store

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Outbound HTTP client
# ---------------------------------------------------------------------------

_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient()
    return _http_client


async def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------

def search_url() -> str:
    return f"{config.tenor.base_url.rstrip('/')}/search"


def search_params(query: str, api_key: str, limit: int) -> dict[str, str | int]:
    return {
        "q": query,
        "key": api_key,
        "client_key": config.tenor.client_key,
        "media_filter": config.tenor.media_filter,
        "contentfilter": config.tenor.content_filter,
        "limit": limit,
    }


def request_headers() -> dict[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": config.tenor.user_agent,
        "Referer": config.tenor.referer,
        "Origin": config.tenor.origin,
    }


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def normalize_media_formats(raw: dict[str, Any] | None) -> dict[str, Any]:
    """Copy *raw* and fill every required variant it lacks with a placeholder."""
    formats = dict(raw or {})
    for name in REQUIRED_FORMATS:
        if not formats.get(name):
            formats[name] = placeholder_variant()
    return formats


def normalize_result(raw: dict[str, Any], now: int | None = None) -> GifResult:
    """Map one raw Tenor result onto ``GifResult``, applying field defaults."""
    title = raw.get("title") or ""
    created = raw.get("created") or (now if now is not None else int(time.time()))
    return GifResult.model_validate({
        "id": str(raw["id"]),
        "title": title,
        "media_formats": normalize_media_formats(raw.get("media_formats")),
        "content_description": raw.get("content_description") or title,
        "created": int(created),
        "hasaudio": bool(raw.get("hasaudio", False)),
        "url": raw.get("url") or "",
    })


# ---------------------------------------------------------------------------
# Live fetch
# ---------------------------------------------------------------------------

async def _request(
    client: httpx.AsyncClient, query: str, api_key: str, limit: int
) -> list[dict[str, Any]]:
    url = search_url()
    params = search_params(query, api_key, limit)
    kwargs: dict[str, Any] = {}
    if config.tenor.timeout is not None:
        kwargs["timeout"] = config.tenor.timeout

    log.debug("Querying Tenor for %r (limit=%d)", query, limit)
    resp = await client.get(url, params=params, headers=request_headers(), **kwargs)
    if not resp.is_success:
        raise TenorHTTPError(resp.status_code, resp.text)

    try:
        data = resp.json()
    except ValueError as exc:
        raise TenorResponseError("Tenor response is not valid JSON") from exc
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise TenorResponseError("Invalid response structure from Tenor API")
    return data["results"]


async def fetch_live(
    query: str,
    limit: int | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    settings: SettingsStore | None = None,
    cache_store: cache.CacheStore | None = None,
) -> list[GifResult]:
    """Query Tenor for *query*, caching the normalized results.

    Returns synthetic results instead of raising when the provider cannot be
    used.  An empty or whitespace-only query returns ``[]`` without any I/O.
    """
    if not query or not query.strip():
        return []
    if limit is None:
        limit = config.tenor.default_limit

    try:
        settings = settings if settings is not None else get_settings_store()
        api_key = await settings.get(config.tenor.credential_key)
        if not api_key:
            raise CredentialMissing(config.tenor.credential_key)

        http = client if client is not None else get_http_client()
        raw_results = await _request(http, query, api_key, limit)
        now = int(time.time())
        results = [normalize_result(raw, now) for raw in raw_results]
    except CredentialMissing:
        log.warning("Tenor API key is not configured; serving fallback results for %r", query)
        return fallback.synthesize(query)
    except Exception:
        log.exception("Tenor search failed for %r; serving fallback results", query)
        return fallback.synthesize(query)

    log.info("Tenor returned %d results for %r", len(results), query)
    await cache.store(query, results, backend=cache_store)
    return results
