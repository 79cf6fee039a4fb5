"""Remote catalog access over HTTP."""

from infrastructure.remote.fetcher import fetch_catalog

__all__ = ["fetch_catalog"]
