"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum


class TagKind(IntEnum):
    """Which sources know a unified tag, and under which names.

    Values double as the persisted ``type`` discriminant.
    """

    AP_ONLY = 1
    DB_ONLY = 2
    BOTH_EQUAL = 3
    BOTH_DIFFERENT = 4


class AnimePicturesCategory(IntEnum):
    UNKNOWN = 0
    CHARACTER = 1
    REFERENCE = 2
    COPYRIGHT = 3
    AUTHOR = 4
    GAME_COPYRIGHT = 5
    OTHER_COPYRIGHT = 6
    OBJECT = 7
    # not documented by the API but returned for some tags
    META = 8


class DanbooruCategory(IntEnum):
    GENERAL = 0
    ARTIST = 1
    COPYRIGHT = 3
    CHARACTER = 4
    META = 5
