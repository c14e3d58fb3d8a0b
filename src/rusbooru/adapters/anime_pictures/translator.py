"""Translate Anime-Pictures payloads into domain tags."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from rusbooru.domain.model import AnimePicturesCategory, AnimePicturesTag

if TYPE_CHECKING:
    from .schema import TagPayload

log = getLogger(__name__)


def _category(value: int) -> AnimePicturesCategory:
    try:
        return AnimePicturesCategory(value)
    except ValueError:
        log.debug("Unknown Anime-Pictures tag type %s", value)
        return AnimePicturesCategory.UNKNOWN


def translate_tag(
    payload: TagPayload,
    *,
    alias: AnimePicturesTag | None = None,
) -> AnimePicturesTag:
    return AnimePicturesTag(
        id=payload.id,
        name=payload.tag,
        ru_name=payload.tag_ru,
        ja_name=payload.tag_jp,
        category=_category(payload.type),
        post_count=payload.num,
        public_post_count=payload.num_pub,
        alias_id=payload.alias,
        alias=alias,
    )
