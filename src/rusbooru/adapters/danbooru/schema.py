"""Pydantic models describing the Danbooru tag payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

TAG_FIELDS = ("id", "name", "category", "antecedent_alias", "consequent_aliases")


class DanbooruBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AliasPayload(DanbooruBaseModel):
    antecedent_name: str
    consequent_name: str
    status: str = "active"


class TagPayload(DanbooruBaseModel):
    id: int
    name: str
    category: int = 0
    antecedent_alias: AliasPayload | None = None
    consequent_aliases: list[AliasPayload] = Field(default_factory=list[AliasPayload])


TagListAdapter = TypeAdapter(list[TagPayload])
