"""Pydantic models describing the Anime-Pictures API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class AnimePicturesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TagPayload(AnimePicturesBaseModel):
    id: int
    tag: str
    tag_ru: str | None = None
    tag_jp: str | None = None
    num: int = 0
    num_pub: int = 0
    type: int = 0
    alias: int | None = None
    parent: int | None = None

    _normalize_names = field_validator("tag_ru", "tag_jp", mode="before")(_blank_to_none)


class TagSearchResponse(AnimePicturesBaseModel):
    success: bool = True
    offset: int = 0
    limit: int = 0
    tags: list[TagPayload] = []


class TagResponse(AnimePicturesBaseModel):
    success: bool = True
    tag: TagPayload | None = None


class TagListResponse(AnimePicturesBaseModel):
    success: bool = True
    tags: list[TagPayload] = []
