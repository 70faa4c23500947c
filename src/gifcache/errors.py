"""Exceptions raised inside the live provider path.

None of these escape ``gifcache.search()``: the live path converts every one of
them into synthetic fallback results.
"""

from __future__ import annotations


class GifCacheError(Exception):
    """Base class for gifcache errors."""


class CredentialMissing(GifCacheError):
    """No provider API key is configured."""


class TenorError(GifCacheError):
    """The provider could not be used to answer a query."""


class TenorHTTPError(TenorError):
    """The provider answered with a non-success status."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"Tenor API returned status {status}: {body}")


class TenorResponseError(TenorError):
    """The provider's body was not JSON or lacked a ``results`` list."""
