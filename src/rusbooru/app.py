"""Application wiring: one tag context per process."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from rusbooru.adapters.anime_pictures import AnimePicturesClient
from rusbooru.adapters.danbooru import DanbooruClient
from rusbooru.adapters.sqlalchemy import SqlAlchemyTagCacheStore
from rusbooru.config import (
    get_anime_pictures_config,
    get_danbooru_config,
    get_database_config,
    get_tag_cache_config,
)
from rusbooru.domain.reconciliation import ReconciliationEngine
from rusbooru.domain.tag_cache import TagCatalog

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from rusbooru.config import AnimePicturesConfig, DanbooruConfig, TagCacheConfig
    from rusbooru.domain.ports.storage import TagCacheStore

log = getLogger(__name__)


@dataclass(slots=True)
class TagContext:
    """Everything a lookup needs, built once and torn down together."""

    catalog: TagCatalog
    engine: ReconciliationEngine
    anime_pictures: AnimePicturesClient
    danbooru: DanbooruClient

    async def aclose(self) -> None:
        self.catalog.close()
        await self.anime_pictures.aclose()
        await self.danbooru.aclose()
        log.info("Tag context closed with %s cached tags", self.catalog.size)


def build_tag_context(
    *,
    store: TagCacheStore | None = None,
    anime_pictures: AnimePicturesClient | None = None,
    danbooru: DanbooruClient | None = None,
    cache_config: TagCacheConfig | None = None,
    anime_pictures_config: AnimePicturesConfig | None = None,
    danbooru_config: DanbooruConfig | None = None,
) -> TagContext:
    effective_store = store or SqlAlchemyTagCacheStore.from_uri(get_database_config().uri)
    catalog = TagCatalog.open(
        store=effective_store,
        config=cache_config or get_tag_cache_config(),
    )
    ap_client = anime_pictures or AnimePicturesClient(
        config=anime_pictures_config or get_anime_pictures_config()
    )
    db_client = danbooru or DanbooruClient(config=danbooru_config or get_danbooru_config())
    engine = ReconciliationEngine(catalog=catalog, anime_pictures=ap_client, danbooru=db_client)
    log.info("Tag context ready with %s cached tags", catalog.size)
    return TagContext(catalog=catalog, engine=engine, anime_pictures=ap_client, danbooru=db_client)


@asynccontextmanager
async def open_tag_context(
    *,
    store: TagCacheStore | None = None,
    anime_pictures: AnimePicturesClient | None = None,
    danbooru: DanbooruClient | None = None,
    cache_config: TagCacheConfig | None = None,
) -> AsyncIterator[TagContext]:
    """Build a ``TagContext`` and flush the cache and close clients on exit."""

    context = build_tag_context(
        store=store,
        anime_pictures=anime_pictures,
        danbooru=danbooru,
        cache_config=cache_config,
    )
    try:
        yield context
    finally:
        await context.aclose()
