"""Runtime configuration for the GIF search layer.

Uses pydantic-settings ``BaseSettings`` sub-configs grouped under a top-level
``GifCacheConfig``.  Every field can be overridden with an env var carrying the
section's prefix, e.g. ``GIFCACHE_CACHE_TTL_SECONDS=600``.

Call ``reload_config()`` after changing the environment (tests do this) to
rebuild the in-memory singleton.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class TenorConfig(BaseSettings):
    model_config = {"env_prefix": "GIFCACHE_TENOR_"}

    base_url: str = "https://tenor.googleapis.com/v2"
    client_key: str = "gif_enigma_devvit"
    media_filter: str = "gif,tinygif,mediumgif,nanogif"
    content_filter: str = "high"
    default_limit: int = 8
    user_agent: str = "GIF-Enigma/1.0"
    referer: str = "https://www.reddit.com"
    origin: str = "https://www.reddit.com"
    # Settings-store key under which the API key lives.
    credential_key: str = "tenor-api-key"
    # None leaves the transport's own default in place.
    timeout: float | None = None


class CacheConfig(BaseSettings):
    model_config = {"env_prefix": "GIFCACHE_CACHE_"}

    prefix: str = "tenor_search:"
    ttl_seconds: int = 60 * 60
    backend: str = "memory"  # "memory" | "redis"
    redis_url: str = "redis://localhost:6379/0"


class FallbackConfig(BaseSettings):
    model_config = {"env_prefix": "GIFCACHE_FALLBACK_"}

    media_host: str = "https://media.tenor.com"
    view_host: str = "https://tenor.com"


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------

_SECTIONS: dict[str, type[BaseSettings]] = {
    "tenor": TenorConfig,
    "cache": CacheConfig,
    "fallback": FallbackConfig,
}


class GifCacheConfig(BaseModel):
    tenor: TenorConfig = TenorConfig()
    cache: CacheConfig = CacheConfig()
    fallback: FallbackConfig = FallbackConfig()


# Module-level singleton
config = GifCacheConfig()


def _reload_section(section_name: str) -> None:
    new_obj = _SECTIONS[section_name]()
    setattr(config, section_name, new_obj)


def reload_config() -> None:
    """Rebuild all sub-configs from the current environment."""
    for section_name in _SECTIONS:
        _reload_section(section_name)
