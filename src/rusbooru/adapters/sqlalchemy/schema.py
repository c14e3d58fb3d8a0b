"""JSON shape of a stored cache record.

The field names (``type``, ``apName``, ``ruName``, ``rotationTimestamp``) are
the on-disk format and must stay stable across releases.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from rusbooru.domain.model import (
    APOnlyTag,
    BothDifferentTag,
    BothEqualTag,
    DBOnlyTag,
    UnifiedTag,
)
from rusbooru.domain.ports.storage import CacheSnapshot


class RecordBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


# ``type`` carries the TagKind value


class APOnlyRecord(RecordBaseModel):
    type: Literal[1] = 1
    id: str
    ru_name: str | None = Field(default=None, alias="ruName")


class DBOnlyRecord(RecordBaseModel):
    type: Literal[2] = 2
    id: str
    ru_name: str | None = Field(default=None, alias="ruName")


class BothEqualRecord(RecordBaseModel):
    type: Literal[3] = 3
    id: str
    ru_name: str | None = Field(default=None, alias="ruName")


class BothDifferentRecord(RecordBaseModel):
    type: Literal[4] = 4
    id: str
    ap_name: str = Field(alias="apName")
    ru_name: str | None = Field(default=None, alias="ruName")


TagRecord = Annotated[
    APOnlyRecord | DBOnlyRecord | BothEqualRecord | BothDifferentRecord,
    Field(discriminator="type"),
]


class CacheRecord(RecordBaseModel):
    active: list[TagRecord] = Field(default_factory=list[TagRecord])
    stale: list[TagRecord] = Field(default_factory=list[TagRecord])
    rotation_timestamp: int = Field(default=0, alias="rotationTimestamp")


def tag_to_record(tag: UnifiedTag) -> TagRecord:
    match tag:
        case BothDifferentTag():
            return BothDifferentRecord(id=tag.id, ap_name=tag.ap_name, ru_name=tag.ru_name)
        case BothEqualTag():
            return BothEqualRecord(id=tag.id, ru_name=tag.ru_name)
        case DBOnlyTag():
            return DBOnlyRecord(id=tag.id, ru_name=tag.ru_name)
        case APOnlyTag():
            return APOnlyRecord(id=tag.id, ru_name=tag.ru_name)


def record_to_tag(record: TagRecord) -> UnifiedTag:
    match record:
        case BothDifferentRecord():
            return BothDifferentTag(id=record.id, ap_name=record.ap_name, ru_name=record.ru_name)
        case BothEqualRecord():
            return BothEqualTag(id=record.id, ru_name=record.ru_name)
        case DBOnlyRecord():
            return DBOnlyTag(id=record.id, ru_name=record.ru_name)
        case APOnlyRecord():
            return APOnlyTag(id=record.id, ru_name=record.ru_name)


def encode_snapshot(snapshot: CacheSnapshot) -> str:
    record = CacheRecord(
        active=[tag_to_record(tag) for tag in snapshot.active],
        stale=[tag_to_record(tag) for tag in snapshot.stale],
        rotation_timestamp=snapshot.rotation_timestamp,
    )
    return record.model_dump_json(by_alias=True, exclude_none=True)


def decode_snapshot(payload: str) -> CacheSnapshot:
    record = CacheRecord.model_validate_json(payload)
    return CacheSnapshot(
        active=[record_to_tag(item) for item in record.active],
        stale=[record_to_tag(item) for item in record.stale],
        rotation_timestamp=record.rotation_timestamp,
    )
