"""HTTP surface for the GIF search layer."""

from gifcache.api.app import configure_logging, create_app

__all__ = ["configure_logging", "create_app"]
