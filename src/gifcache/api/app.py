import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gifcache.api.gifs import router as gifs_router
from gifcache.cache import get_cache_store
from gifcache.tenor import close_http_client

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure structured JSON logging (or plain text for dev)."""
    log_format = os.environ.get("GIFCACHE_LOG_FORMAT", "json")
    root = logging.getLogger()
    root.setLevel(os.environ.get("GIFCACHE_LOG_LEVEL", "INFO").upper())
    # Remove existing handlers
    for h in root.handlers[:]:
        root.removeHandler(h)
    handler = logging.StreamHandler()
    if log_format == "json":
        import json as _json

        class JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                d = {
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                }
                if record.exc_info:
                    d["exception"] = self.formatException(record.exc_info)
                return _json.dumps(d)

        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    store = get_cache_store()
    logger.info("GIF search ready (cache store: %s)", type(store).__name__)
    yield
    await close_http_client()
    close = getattr(store, "close", None)
    if close is not None:
        await close()


def create_app(*, setup_logging: bool = False) -> FastAPI:
    if setup_logging:
        configure_logging()
    app = FastAPI(title="gifcache", lifespan=_lifespan)
    app.include_router(gifs_router)
    return app
