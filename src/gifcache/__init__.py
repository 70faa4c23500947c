"""Cached Tenor GIF search with synthetic fallback."""

from gifcache.models.gifs import GifFormatVariant, GifResult
from gifcache.service import search

__all__ = ["GifFormatVariant", "GifResult", "search"]
