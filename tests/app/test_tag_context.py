from __future__ import annotations

import asyncio

import pytest

from rusbooru.adapters.anime_pictures import AnimePicturesClient
from rusbooru.adapters.danbooru import DanbooruClient
from rusbooru.app import open_tag_context
from rusbooru.config import TagCacheConfig
from rusbooru.domain.model import AnimePicturesTag, APOnlyTag
from tests.support.sources import (
    FakeAnimePicturesSource,
    FakeDanbooruSource,
    MemoryTagCacheStore,
)


def test_default_wiring(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    for name in ("DANBOORU_LOGIN", "DANBOORU_API_KEY"):
        monkeypatch.delenv(name, raising=False)

    async def scenario() -> None:
        async with open_tag_context() as context:
            assert isinstance(context.anime_pictures, AnimePicturesClient)
            assert isinstance(context.danbooru, DanbooruClient)
            governor = context.anime_pictures.http.governor
            assert governor is not None
            assert governor.capacity == 7
            assert context.danbooru.http.governor is None
            assert context.catalog.size == 0

    asyncio.run(scenario())


def test_context_flushes_cache_and_closes_sources() -> None:
    store = MemoryTagCacheStore()
    anime_pictures = FakeAnimePicturesSource()
    danbooru = FakeDanbooruSource()
    anime_pictures.add(AnimePicturesTag(id=1, name="sword", ru_name="меч"))

    async def scenario() -> None:
        async with open_tag_context(
            store=store,
            anime_pictures=anime_pictures,  # type: ignore[arg-type]
            danbooru=danbooru,  # type: ignore[arg-type]
            cache_config=TagCacheConfig(flush_delay_seconds=60.0),
        ) as context:
            await context.engine.resolve_by_localized_name("меч")
            assert context.catalog.cache.flush_pending

    asyncio.run(scenario())

    assert store.snapshots[TagCacheConfig().name].active == [APOnlyTag(id="sword", ru_name="меч")]
    assert anime_pictures.closed
    assert danbooru.closed
