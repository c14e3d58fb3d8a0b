from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002

from rusbooru.adapters.sqlalchemy import create_store_engine
from rusbooru.config import TagCacheConfig
from rusbooru.domain.reconciliation import ReconciliationEngine
from rusbooru.domain.tag_cache import TagCatalog
from tests.support.sources import (
    FakeAnimePicturesSource,
    FakeDanbooruSource,
    MemoryTagCacheStore,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, milliseconds: int) -> None:
        self.now += milliseconds


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_store_engine("sqlite+pysqlite:///:memory:")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryTagCacheStore:
    return MemoryTagCacheStore()


@pytest.fixture
def anime_pictures() -> FakeAnimePicturesSource:
    return FakeAnimePicturesSource()


@pytest.fixture
def danbooru() -> FakeDanbooruSource:
    return FakeDanbooruSource()


@pytest.fixture
def catalog(memory_store: MemoryTagCacheStore, clock: FakeClock) -> TagCatalog:
    return TagCatalog.open(store=memory_store, config=TagCacheConfig(), clock=clock)


@pytest.fixture
def engine(
    catalog: TagCatalog,
    anime_pictures: FakeAnimePicturesSource,
    danbooru: FakeDanbooruSource,
) -> ReconciliationEngine:
    return ReconciliationEngine(catalog=catalog, anime_pictures=anime_pictures, danbooru=danbooru)
