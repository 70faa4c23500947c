"""GIF search proxy – keeps the Tenor API key server-side."""

from __future__ import annotations

from fastapi import APIRouter, Query

from gifcache.models.gifs import GifSearchResponse
from gifcache.service import search

router = APIRouter(tags=["gifs"])


@router.get("/api/v1/gifs/search")
async def gif_search(
    q: str = Query(..., min_length=1),
    limit: int = Query(8, ge=1, le=50),
) -> GifSearchResponse:
    return GifSearchResponse(results=await search(q, limit))
