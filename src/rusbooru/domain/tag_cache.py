"""Two-generation cache of unified tags and the catalog that indexes it.

Instead of per-entry timers the cache keeps an *active* and a *stale*
generation. Once ``lifetime`` has passed since the last rotation, the stale
generation is dropped and the active one takes its place. Reading an entry from
the stale generation moves it back into the active one, so an entry that is in
use keeps living while an unused one disappears after one to two lifetimes.
"""

from __future__ import annotations

import time
from logging import getLogger
from typing import TYPE_CHECKING

from rusbooru.common.debounce import DebouncedCall
from rusbooru.domain.model import anime_pictures_name, cache_key
from rusbooru.domain.ports.storage import CacheLoadError, CacheSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from rusbooru.config.storage import TagCacheConfig
    from rusbooru.domain.model import UnifiedTag
    from rusbooru.domain.ports.storage import TagCacheStore

log = getLogger(__name__)


def epoch_ms() -> int:
    return time.time_ns() // 1_000_000


class GenerationalTagCache:
    """Durable tag store keyed by case-insensitive tag id."""

    def __init__(
        self,
        *,
        store: TagCacheStore,
        name: str,
        lifetime_ms: int,
        flush_delay: float = 1.0,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        if lifetime_ms <= 0:
            raise ValueError("Cache lifetime must be positive")
        self.name = name
        self._store = store
        self._lifetime_ms = lifetime_ms
        self._clock = clock
        self._flusher = DebouncedCall(self.flush, delay=flush_delay)

        snapshot = self._load_snapshot()
        self._active: dict[str, UnifiedTag] = {cache_key(tag.id): tag for tag in snapshot.active}
        self._stale: dict[str, UnifiedTag] = {
            cache_key(tag.id): tag
            for tag in snapshot.stale
            if cache_key(tag.id) not in self._active
        }
        self._rotation_timestamp = snapshot.rotation_timestamp
        self._rotate_if_due()

    @property
    def size(self) -> int:
        return len(self._active) + len(self._stale)

    @property
    def rotation_timestamp(self) -> int:
        return self._rotation_timestamp

    @property
    def flush_pending(self) -> bool:
        return self._flusher.pending

    def get(self, tag_id: str) -> UnifiedTag | None:
        self._rotate_if_due()
        key = cache_key(tag_id)
        tag = self._active.get(key)
        if tag is not None:
            return tag
        tag = self._stale.pop(key, None)
        if tag is None:
            return None
        self._active[key] = tag
        self._flusher.schedule()
        return tag

    def get_all(self) -> list[UnifiedTag]:
        self._rotate_if_due()
        return [*self._active.values(), *self._stale.values()]

    def add(self, tag: UnifiedTag) -> None:
        self._rotate_if_due()
        key = cache_key(tag.id)
        self._active.pop(key, None)
        self._stale.pop(key, None)
        self._active[key] = tag
        self._flusher.schedule()

    def remove(self, tag_id: str) -> bool:
        self._rotate_if_due()
        key = cache_key(tag_id)
        removed = self._active.pop(key, None) or self._stale.pop(key, None)
        if removed is None:
            return False
        self._flusher.schedule()
        return True

    def clear(self) -> None:
        self._active = {}
        self._stale = {}
        self._rotation_timestamp = self._clock()
        self._flusher.schedule()

    def snapshot(self) -> CacheSnapshot:
        return CacheSnapshot(
            active=list(self._active.values()),
            stale=list(self._stale.values()),
            rotation_timestamp=self._rotation_timestamp,
        )

    def flush(self) -> None:
        """Write both generations to the store right away."""

        self._flusher.cancel()
        self._store.save(self.name, self.snapshot())
        log.debug("Saved tag cache %r with %s entries", self.name, self.size)

    def close(self) -> None:
        self._flusher.flush()

    def _rotate_if_due(self) -> None:
        now = self._clock()
        if now < self._rotation_timestamp + self._lifetime_ms:
            return
        log.info(
            "Rotating tag cache %r: dropping %s stale entries, %s entries become stale",
            self.name,
            len(self._stale),
            len(self._active),
        )
        self._stale = self._active
        self._active = {}
        self._rotation_timestamp = now
        self._flusher.schedule()

    def _load_snapshot(self) -> CacheSnapshot:
        try:
            snapshot = self._store.load(self.name)
        except CacheLoadError as exc:
            log.warning("%s; starting with an empty cache", exc)
            return CacheSnapshot()
        return snapshot if snapshot is not None else CacheSnapshot()


class TagCatalog:
    """Owns the tag cache together with its secondary name indexes.

    The indexes map an Anime-Pictures name or a localized name to a tag id and
    always defer to the cache for the tag itself, so rotation and promotion
    apply to indexed lookups as well.
    """

    def __init__(self, cache: GenerationalTagCache) -> None:
        self._cache = cache
        self._by_ap_name: dict[str, str] = {}
        self._by_ru_name: dict[str, str] = {}
        for tag in cache.get_all():
            self._index(tag)

    @classmethod
    def open(
        cls,
        *,
        store: TagCacheStore,
        config: TagCacheConfig,
        clock: Callable[[], int] = epoch_ms,
    ) -> TagCatalog:
        cache = GenerationalTagCache(
            store=store,
            name=config.name,
            lifetime_ms=config.lifetime_ms,
            flush_delay=config.flush_delay_seconds,
            clock=clock,
        )
        return cls(cache)

    @property
    def cache(self) -> GenerationalTagCache:
        return self._cache

    @property
    def size(self) -> int:
        return self._cache.size

    def get(self, tag_id: str) -> UnifiedTag | None:
        return self._cache.get(tag_id)

    def get_by_ap_name(self, name: str) -> UnifiedTag | None:
        tag_id = self._by_ap_name.get(name)
        if tag_id is None:
            return None
        tag = self._cache.get(tag_id)
        if tag is None or anime_pictures_name(tag) != name:
            del self._by_ap_name[name]
            return None
        return tag

    def get_by_ru_name(self, name: str) -> UnifiedTag | None:
        tag_id = self._by_ru_name.get(name)
        if tag_id is None:
            return None
        tag = self._cache.get(tag_id)
        if tag is None or tag.ru_name != name:
            del self._by_ru_name[name]
            return None
        return tag

    def save(self, tag: UnifiedTag) -> UnifiedTag:
        self._cache.add(tag)
        self._index(tag)
        log.debug("Cached %s %r (cache size %s)", tag.kind.name, tag.id, self._cache.size)
        return tag

    def clear(self) -> None:
        self._cache.clear()
        self._by_ap_name.clear()
        self._by_ru_name.clear()

    def close(self) -> None:
        self._cache.close()

    def _index(self, tag: UnifiedTag) -> None:
        ap_name = anime_pictures_name(tag)
        if ap_name is not None:
            self._by_ap_name[ap_name] = tag.id
        if tag.ru_name:
            self._by_ru_name[tag.ru_name] = tag.id
