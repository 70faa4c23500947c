"""Canonical GIF result records, using Tenor's field names on the wire."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, TypeAdapter

# Variants every returned record is guaranteed to carry.
REQUIRED_FORMATS: tuple[str, ...] = ("gif", "tinygif", "mediumgif", "nanogif")


class GifFormatVariant(BaseModel):
    url: str = ""
    dims: list[int] = Field(default_factory=lambda: [0, 0])
    duration: Annotated[float, Field(ge=0)] = 0
    preview: str = ""
    size: Annotated[int, Field(ge=0)] = 0


class GifResult(BaseModel):
    id: str
    title: str = ""
    media_formats: dict[str, GifFormatVariant]
    content_description: str = ""
    created: int
    hasaudio: bool = False
    url: str = ""


class GifSearchResponse(BaseModel):
    results: list[GifResult]


GifResultList = TypeAdapter(list[GifResult])


def placeholder_variant() -> GifFormatVariant:
    """Zero-valued stand-in for a variant the provider did not return."""
    return GifFormatVariant(url="", dims=[0, 0], duration=0, preview="", size=0)
