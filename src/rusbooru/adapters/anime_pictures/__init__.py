"""Public interface for the Anime-Pictures adapter."""

from __future__ import annotations

from .client import AnimePicturesAPIError, AnimePicturesClient
from .schema import TagPayload, TagSearchResponse
from .translator import translate_tag

__all__ = [
    "AnimePicturesAPIError",
    "AnimePicturesClient",
    "TagPayload",
    "TagSearchResponse",
    "translate_tag",
]
