"""Synthetic results served when the live provider cannot be used."""

from __future__ import annotations

import time

from gifcache.config import config
from gifcache.models.gifs import GifFormatVariant, GifResult

FALLBACK_COUNT = 8

# format -> (url stem, preview stem, dims, size in bytes); gif > mediumgif > tinygif > nanogif
_TIERS: dict[str, tuple[str, str, list[int], int]] = {
    "gif": ("mock-gif", "mock-preview", [480, 320], 1_024_000),
    "tinygif": ("mock-tinygif", "mock-tinypreview", [220, 150], 256_000),
    "mediumgif": ("mock-mediumgif", "mock-mediumpreview", [320, 240], 512_000),
    "nanogif": ("mock-nanogif", "mock-nanopreview", [100, 75], 128_000),
}


def _variants(index: int) -> dict[str, GifFormatVariant]:
    host = config.fallback.media_host
    return {
        name: GifFormatVariant(
            url=f"{host}/{stem}-{index}.gif",
            dims=list(dims),
            duration=0,
            preview=f"{host}/{preview}-{index}.gif",
            size=size,
        )
        for name, (stem, preview, dims, size) in _TIERS.items()
    }


def synthesize(query: str) -> list[GifResult]:
    """Build eight placeholder results mentioning *query*.

    Ids embed the index and a millisecond timestamp, so they do not collide
    across calls.  No I/O is performed.
    """
    # Lone surrogates cannot be stored in a str field.
    query = query.encode("utf-8", "replace").decode("utf-8")
    now_ms = int(time.time() * 1000)
    return [
        GifResult(
            id=f"tenor-{i}-{now_ms}",
            title=f"{query} GIF {i + 1}",
            media_formats=_variants(i),
            content_description=f"{query} example {i + 1}",
            created=now_ms // 1000,
            hasaudio=False,
            url=f"{config.fallback.view_host}/view/mock-{i}",
        )
        for i in range(FALLBACK_COUNT)
    ]
