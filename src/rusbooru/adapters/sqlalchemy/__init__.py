"""SQLAlchemy adapter for the persisted tag cache."""

from __future__ import annotations

from .schema import CacheRecord, decode_snapshot, encode_snapshot
from .store import SqlAlchemyTagCacheStore, create_store_engine
from .tables import metadata, tag_cache_records_table

__all__ = [
    "CacheRecord",
    "SqlAlchemyTagCacheStore",
    "create_store_engine",
    "decode_snapshot",
    "encode_snapshot",
    "metadata",
    "tag_cache_records_table",
]
