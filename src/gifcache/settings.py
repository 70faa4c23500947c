"""Pluggable settings stores that hold the provider credential."""

from __future__ import annotations

import os
from typing import Protocol

_store: SettingsStore | None = None


class SettingsStore(Protocol):
    """Protocol for application settings lookups."""

    async def get(self, key: str) -> str | None:
        """Return the value for *key*, or None when it is not set."""
        ...


class EnvSettingsStore:
    """Read settings from environment variables.

    ``tenor-api-key`` is looked up as ``GIFCACHE_TENOR_API_KEY``.
    """

    def __init__(self, prefix: str = "GIFCACHE_") -> None:
        self.prefix = prefix

    def env_name(self, key: str) -> str:
        return self.prefix + key.upper().replace("-", "_").replace(".", "_")

    async def get(self, key: str) -> str | None:
        return os.environ.get(self.env_name(key)) or None


class MemorySettingsStore:
    """Dict-backed settings, for embedding callers and tests."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    async def get(self, key: str) -> str | None:
        return self.values.get(key)


def init_settings_store(store: SettingsStore | None = None) -> SettingsStore:
    """Install *store* as the global settings store (env-backed by default)."""
    global _store
    _store = store if store is not None else EnvSettingsStore()
    return _store


def get_settings_store() -> SettingsStore:
    if _store is None:
        return init_settings_store()
    return _store


def reset() -> None:
    global _store
    _store = None
