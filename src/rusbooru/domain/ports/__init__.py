"""Domain port definitions for adapters."""

from __future__ import annotations

from .sources import AnimePicturesSource, DanbooruSource
from .storage import CacheLoadError, CacheSnapshot, TagCacheStore

__all__ = [
    "AnimePicturesSource",
    "CacheLoadError",
    "CacheSnapshot",
    "DanbooruSource",
    "TagCacheStore",
]
