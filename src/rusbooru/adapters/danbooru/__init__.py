"""Public interface for the Danbooru adapter."""

from __future__ import annotations

from .client import DanbooruAPIError, DanbooruClient, to_danbooru_name
from .schema import AliasPayload, TagPayload
from .translator import translate_tag

__all__ = [
    "AliasPayload",
    "DanbooruAPIError",
    "DanbooruClient",
    "TagPayload",
    "to_danbooru_name",
    "translate_tag",
]
