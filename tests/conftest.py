import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from gifcache import cache, settings, tenor
from gifcache.api.app import create_app
from gifcache.cache import MemoryCacheStore
from gifcache.settings import MemorySettingsStore


def _reset_state():
    """Reset the config singleton and every lazily created collaborator."""
    import gifcache.config as _cfg
    _cfg.reload_config()
    cache.reset()
    settings.reset()


@pytest.fixture(autouse=True)
async def _clear_state(monkeypatch):
    monkeypatch.delenv("GIFCACHE_TENOR_API_KEY", raising=False)
    await tenor.close_http_client()
    _reset_state()
    yield
    await tenor.close_http_client()
    _reset_state()


class RecordingCacheStore(MemoryCacheStore):
    """Memory store that records every call made against it."""

    def __init__(self):
        super().__init__()
        self.calls: list[tuple] = []

    async def get(self, key):
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key, value):
        self.calls.append(("set", key, value))
        await super().set(key, value)

    async def expire(self, key, ttl_seconds):
        self.calls.append(("expire", key, ttl_seconds))
        await super().expire(key, ttl_seconds)


class FailingCacheStore:
    """Store whose every operation raises."""

    async def get(self, key):
        raise ConnectionError("cache down")

    async def set(self, key, value):
        raise ConnectionError("cache down")

    async def expire(self, key, ttl_seconds):
        raise ConnectionError("cache down")


class FakeTenor(httpx.AsyncBaseTransport):
    """Transport answering every request with ``self.response``."""

    def __init__(self):
        self.response = httpx.Response(200, json={"results": []})
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request):
        self.requests.append(request)
        return self.response


class ForbiddenTransport(httpx.AsyncBaseTransport):
    """Transport that records and rejects every request; tests assert it stays unused."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request):
        self.requests.append(request)
        raise AssertionError(f"unexpected HTTP call to {request.url}")


@pytest.fixture()
def cache_store():
    store = RecordingCacheStore()
    cache.init_cache_store(store)
    return store


@pytest.fixture()
def settings_store():
    store = MemorySettingsStore({"tenor-api-key": "test-key"})
    settings.init_settings_store(store)
    return store


@pytest.fixture()
def no_credentials():
    store = MemorySettingsStore()
    settings.init_settings_store(store)
    return store


@pytest.fixture()
async def tenor_transport():
    transport = FakeTenor()
    tenor._http_client = httpx.AsyncClient(transport=transport)
    yield transport
    await tenor.close_http_client()


@pytest.fixture()
async def forbidden_transport():
    transport = ForbiddenTransport()
    tenor._http_client = httpx.AsyncClient(transport=transport)
    yield transport
    await tenor.close_http_client()


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c


def tenor_result(gif_id="123", **overrides):
    """A raw Tenor v2 result with all four required variants."""
    def variant(name, w, h):
        return {
            "url": f"https://media.tenor.com/{gif_id}/{name}.gif",
            "dims": [w, h],
            "duration": 1.2,
            "preview": f"https://media.tenor.com/{gif_id}/{name}.png",
            "size": w * h,
        }

    result = {
        "id": gif_id,
        "title": "Happy cat",
        "media_formats": {
            "gif": variant("gif", 498, 280),
            "tinygif": variant("tinygif", 220, 124),
            "mediumgif": variant("mediumgif", 320, 180),
            "nanogif": variant("nanogif", 90, 50),
        },
        "content_description": "A cat dancing",
        "created": 1626987300.123456,
        "hasaudio": False,
        "url": f"https://tenor.com/view/happy-cat-{gif_id}",
    }
    result.update(overrides)
    return result


@pytest.fixture()
def make_result():
    return tenor_result


@pytest.fixture()
def failing_cache_store():
    store = FailingCacheStore()
    cache.init_cache_store(store)
    return store
