from gifcache.models.gifs import (
    REQUIRED_FORMATS,
    GifFormatVariant,
    GifResult,
    GifResultList,
    GifSearchResponse,
    placeholder_variant,
)

__all__ = [
    "REQUIRED_FORMATS",
    "GifFormatVariant",
    "GifResult",
    "GifResultList",
    "GifSearchResponse",
    "placeholder_variant",
]
