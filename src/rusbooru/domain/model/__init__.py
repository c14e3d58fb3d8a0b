"""Domain model exports."""

from __future__ import annotations

from .enums import AnimePicturesCategory, DanbooruCategory, TagKind
from .sources import AnimePicturesTag, DanbooruAlias, DanbooruTag
from .tags import (
    APOnlyTag,
    BothDifferentTag,
    BothEqualTag,
    DBOnlyTag,
    UnifiedTag,
    anime_pictures_name,
    cache_key,
    is_cross_source,
)

__all__ = [
    "APOnlyTag",
    "AnimePicturesCategory",
    "AnimePicturesTag",
    "BothDifferentTag",
    "BothEqualTag",
    "DBOnlyTag",
    "DanbooruAlias",
    "DanbooruCategory",
    "DanbooruTag",
    "TagKind",
    "UnifiedTag",
    "anime_pictures_name",
    "cache_key",
    "is_cross_source",
]
