"""Translate tag strings between Danbooru and localized (Russian) notation.

Danbooru writes tags space-separated with underscores inside names, e.g.
``cat_ears long_hair``. The localized form is comma-separated with spaces,
e.g. ``кошачьи ушки, длинные волосы,``. Search prefixes such as ``-``, ``~``
or ``ch:`` are carried over untouched.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from rusbooru.domain.model import (
    AnimePicturesCategory,
    DanbooruCategory,
    is_cross_source,
)

if TYPE_CHECKING:
    from rusbooru.domain.model import AnimePicturesTag, UnifiedTag
    from rusbooru.domain.ports.sources import AnimePicturesSource
    from rusbooru.domain.reconciliation import ReconciliationEngine

TAG_PREFIXES: Final[tuple[str, ...]] = (
    "ch:",
    "char:",
    "character:",
    "co:",
    "copy:",
    "copyright:",
    "gen:",
    "general:",
    "art:",
    "artist:",
    "meta:",
)
PREFIX_PATTERN: Final = re.compile(rf"^[-~(]*({'|'.join(map(re.escape, TAG_PREFIXES))})?")
_COMMA_SEPARATOR: Final = re.compile(r",\s*")
_WHITESPACE: Final = re.compile(r"\s+")

AP_TO_DANBOORU_CATEGORY: Final[dict[AnimePicturesCategory, DanbooruCategory]] = {
    AnimePicturesCategory.UNKNOWN: DanbooruCategory.GENERAL,
    AnimePicturesCategory.CHARACTER: DanbooruCategory.CHARACTER,
    AnimePicturesCategory.REFERENCE: DanbooruCategory.GENERAL,
    AnimePicturesCategory.COPYRIGHT: DanbooruCategory.COPYRIGHT,
    AnimePicturesCategory.AUTHOR: DanbooruCategory.ARTIST,
    AnimePicturesCategory.GAME_COPYRIGHT: DanbooruCategory.COPYRIGHT,
    AnimePicturesCategory.OTHER_COPYRIGHT: DanbooruCategory.COPYRIGHT,
    AnimePicturesCategory.OBJECT: DanbooruCategory.GENERAL,
    AnimePicturesCategory.META: DanbooruCategory.META,
}


def split_prefix(part: str) -> tuple[str, str]:
    """Split ``-ch:name`` style search terms into ``("-ch:", "name")``."""

    match = PREFIX_PATTERN.match(part)
    prefix = match.group(0) if match else ""
    return prefix, part[len(prefix) :]


def danbooru_category(category: AnimePicturesCategory) -> DanbooruCategory:
    return AP_TO_DANBOORU_CATEGORY.get(category, DanbooruCategory.GENERAL)


def toggle_ru_tag(tags_text: str, tag_name: str) -> str:
    """Remove ``tag_name`` from a comma-separated tag string, or append it if absent.

    A line break attached to a removed tag moves to its neighbour so the
    layout of multi-line tag lists survives.
    """

    tags = tags_text.split(",")
    for index, tag in enumerate(tags):
        if tag.strip() != tag_name:
            continue
        if "\n" in tag:
            if index < len(tags) - 1:
                tags[index + 1] = f"\n{tags[index + 1].strip()}"
            elif index > 0:
                tags[index - 1] += "\n"
        del tags[index]
        return ",".join(tags)

    if tags and tags[-1].strip() == "":
        tags.pop()
    tags.extend((f" {tag_name}", ""))
    return ",".join(tags)


async def ru_tags_to_en_tags(text: str, engine: ReconciliationEngine) -> str:
    """Convert comma-separated localized tags into a Danbooru tag query."""

    if "\n" in text:
        lines = await asyncio.gather(*(ru_tags_to_en_tags(line, engine) for line in text.split("\n")))
        return "\n".join(lines)

    async def convert(part: str) -> str:
        if part == "":
            return part
        prefix, name = split_prefix(part)
        tag = await engine.resolve_by_localized_name(name)
        if tag is not None:
            return f"{prefix}{tag.id.replace(' ', '_')}"
        return part.replace(" ", "_")

    parts = _COMMA_SEPARATOR.split(text.strip())
    return " ".join(await asyncio.gather(*(convert(part) for part in parts)))


async def en_tags_to_ru_tags(text: str, engine: ReconciliationEngine) -> str:
    """Convert a Danbooru tag query into comma-separated localized tags.

    Tags without a localized name are kept in English, with spaces.
    """

    if "\n" in text:
        lines = await asyncio.gather(*(en_tags_to_ru_tags(line, engine) for line in text.split("\n")))
        return "\n".join(lines)

    async def convert(part: str) -> str:
        if part == "":
            return part
        prefix, name = split_prefix(part)
        tag = await engine.resolve_by_english_name(name)
        if tag is not None and tag.ru_name:
            return f"{prefix}{tag.ru_name}"
        return part.replace("_", " ")

    parts = list(await asyncio.gather(*(convert(part) for part in _WHITESPACE.split(text.strip()))))
    if parts[-1] != "":
        parts.append("")
    return ", ".join(parts)


@dataclass(frozen=True, slots=True)
class Suggestion:
    """A completion candidate for a partially typed tag."""

    value: str
    label: str
    category: DanbooruCategory
    post_count: int
    matched: bool
    tag: UnifiedTag


def _display_name(tag: AnimePicturesTag) -> str:
    return tag.ru_name or tag.name


async def suggest(
    query: str,
    *,
    anime_pictures: AnimePicturesSource,
    engine: ReconciliationEngine,
) -> list[Suggestion]:
    """Search Anime-Pictures for ``query`` and unify every hit.

    ``matched`` is false for tags Danbooru does not know, which a UI would show
    struck through.
    """

    query = query.strip()
    if not query:
        return []
    found = await anime_pictures.search_by_partial_name(query)
    unified = await asyncio.gather(
        *(engine.resolve_from_anime_pictures(tag.alias or tag) for tag in found)
    )

    suggestions: list[Suggestion] = []
    for tag, unified_tag in zip(found, unified, strict=True):
        target = tag.alias or tag
        label = _display_name(tag)
        if tag.alias is not None:
            label = f"{label} → {_display_name(tag.alias)}"
        suggestions.append(
            Suggestion(
                value=_display_name(target),
                label=label,
                category=danbooru_category(tag.category),
                post_count=target.post_count,
                matched=is_cross_source(unified_tag),
                tag=unified_tag,
            )
        )
    return suggestions
