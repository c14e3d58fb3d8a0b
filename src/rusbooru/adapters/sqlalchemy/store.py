"""SQLAlchemy-backed durable store for the tag cache."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError
from sqlalchemy import create_engine, delete, insert, select, update

from rusbooru.domain.ports.storage import CacheLoadError

from .schema import decode_snapshot, encode_snapshot
from .tables import metadata, tag_cache_records_table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from rusbooru.domain.ports.storage import CacheSnapshot, TagCacheStore

log = getLogger(__name__)


def create_store_engine(database_uri: str) -> Engine:
    """Create an engine for ``database_uri`` and make sure the cache table exists."""

    engine = create_engine(database_uri, future=True)
    metadata.create_all(engine)
    return engine


class SqlAlchemyTagCacheStore:
    """One row per named cache, holding both generations as JSON."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        metadata.create_all(engine)

    @classmethod
    def from_uri(cls, database_uri: str) -> SqlAlchemyTagCacheStore:
        return cls(create_store_engine(database_uri))

    @property
    def engine(self) -> Engine:
        return self._engine

    def load(self, name: str) -> CacheSnapshot | None:
        with self._engine.connect() as connection:
            payload = connection.execute(
                select(tag_cache_records_table.c.payload).where(
                    tag_cache_records_table.c.name == name
                )
            ).scalar_one_or_none()
        if payload is None:
            return None
        try:
            return decode_snapshot(payload)
        except ValidationError as exc:
            raise CacheLoadError(name, f"{exc.error_count()} invalid field(s)") from exc

    def save(self, name: str, snapshot: CacheSnapshot) -> None:
        payload = encode_snapshot(snapshot)
        now = datetime.now(UTC)
        table = tag_cache_records_table
        with self._engine.begin() as connection:
            result = connection.execute(
                update(table).where(table.c.name == name).values(payload=payload, updated_at=now)
            )
            if result.rowcount == 0:
                connection.execute(insert(table).values(name=name, payload=payload, updated_at=now))
        log.debug("Stored cache record %r (%s bytes)", name, len(payload))

    def delete(self, name: str) -> bool:
        table = tag_cache_records_table
        with self._engine.begin() as connection:
            result = connection.execute(delete(table).where(table.c.name == name))
        return result.rowcount > 0

    def dispose(self) -> None:
        self._engine.dispose()


if TYPE_CHECKING:
    _store_check: TagCacheStore = SqlAlchemyTagCacheStore(create_store_engine("sqlite://"))
