"""Unified cross-source tag identity.

``UnifiedTag`` is a closed union of four variants. Only ``BothDifferentTag``
carries an Anime-Pictures specific name, so a tag cannot claim a foreign name
it does not have.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal

from .enums import TagKind


@dataclass(frozen=True, slots=True, kw_only=True)
class APOnlyTag:
    """Known to Anime-Pictures only."""

    kind: ClassVar[Literal[TagKind.AP_ONLY]] = TagKind.AP_ONLY
    id: str
    ru_name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DBOnlyTag:
    """Known to Danbooru only."""

    kind: ClassVar[Literal[TagKind.DB_ONLY]] = TagKind.DB_ONLY
    id: str
    ru_name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BothEqualTag:
    """Known to both sources under the same name."""

    kind: ClassVar[Literal[TagKind.BOTH_EQUAL]] = TagKind.BOTH_EQUAL
    id: str
    ru_name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BothDifferentTag:
    """Known to both sources; ``id`` is the Danbooru name, ``ap_name`` the other one."""

    kind: ClassVar[Literal[TagKind.BOTH_DIFFERENT]] = TagKind.BOTH_DIFFERENT
    id: str
    ap_name: str
    ru_name: str | None = None


type UnifiedTag = APOnlyTag | DBOnlyTag | BothEqualTag | BothDifferentTag


def cache_key(name: str) -> str:
    """Key under which a unified tag id is stored; id lookups ignore case."""

    return name.lower()


def anime_pictures_name(tag: UnifiedTag) -> str | None:
    """Return the name Anime-Pictures uses for ``tag``, if it knows the tag."""

    match tag:
        case BothDifferentTag(ap_name=ap_name):
            return ap_name
        case DBOnlyTag():
            return None
        case _:
            return tag.id


def is_cross_source(tag: UnifiedTag) -> bool:
    return tag.kind in {TagKind.BOTH_EQUAL, TagKind.BOTH_DIFFERENT}
