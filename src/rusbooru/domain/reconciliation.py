"""Cross-source tag reconciliation.

Given a tag known to one authority, find its counterpart in the other and
record the pair as a ``UnifiedTag``. Every entry point consults the catalog
first, so repeated calls for a known tag do not touch the network.

Danbooru names are the canonical ids: when both sources know a tag under
different names, the Danbooru name (with spaces) becomes ``id`` and the
Anime-Pictures name is kept as ``ap_name``.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from rusbooru.common.inflight import InFlightRegistry
from rusbooru.domain.model import (
    APOnlyTag,
    BothDifferentTag,
    BothEqualTag,
    DBOnlyTag,
    UnifiedTag,
)

if TYPE_CHECKING:
    from rusbooru.domain.model import AnimePicturesTag, DanbooruTag
    from rusbooru.domain.ports.sources import AnimePicturesSource, DanbooruSource
    from rusbooru.domain.tag_cache import TagCatalog

log = getLogger(__name__)


def normalize_name(name: str) -> str:
    """Danbooru spells spaces as underscores; unified ids use spaces."""

    return name.replace("_", " ")


def normalize_english_key(name: str) -> str:
    return normalize_name(name).strip().lower()


class ReconciliationEngine:
    def __init__(
        self,
        *,
        catalog: TagCatalog,
        anime_pictures: AnimePicturesSource,
        danbooru: DanbooruSource,
    ) -> None:
        self._catalog = catalog
        self._anime_pictures = anime_pictures
        self._danbooru = danbooru
        self._english_lookups: InFlightRegistry[UnifiedTag | None] = InFlightRegistry("english")
        self._localized_lookups: InFlightRegistry[UnifiedTag | None] = InFlightRegistry(
            "localized"
        )

    @property
    def english_lookups(self) -> InFlightRegistry[UnifiedTag | None]:
        return self._english_lookups

    @property
    def localized_lookups(self) -> InFlightRegistry[UnifiedTag | None]:
        return self._localized_lookups

    async def resolve_from_anime_pictures(self, tag: AnimePicturesTag) -> UnifiedTag:
        """Unify an Anime-Pictures tag, searching Danbooru for its counterpart."""

        tag = await self._follow_anime_pictures_aliases(tag)
        cached = self._catalog.get_by_ap_name(tag.name)
        if cached is not None:
            return cached

        match = await self._danbooru.get_by_exact_name(tag.name)
        if match is None:
            for alias in await self._anime_pictures.get_aliases_of(tag.id):
                match = await self._danbooru.get_by_exact_name(alias.name)
                if match is not None:
                    log.debug("Matched %r on Danbooru via alias %r", tag.name, alias.name)
                    break

        if match is None:
            return self._catalog.save(APOnlyTag(id=tag.name, ru_name=tag.ru_name))

        canonical = await self._follow_danbooru_aliases(match)
        name = normalize_name(canonical.name)
        if name == tag.name:
            unified: UnifiedTag = BothEqualTag(id=name, ru_name=tag.ru_name)
        else:
            unified = BothDifferentTag(id=name, ap_name=tag.name, ru_name=tag.ru_name)
        return self._catalog.save(unified)

    async def resolve_from_danbooru(self, tag: DanbooruTag) -> UnifiedTag:
        """Unify a Danbooru tag, searching Anime-Pictures for its counterpart."""

        tag = await self._follow_danbooru_aliases(tag)
        name = normalize_name(tag.name)
        cached = self._catalog.get(name)
        if cached is not None:
            return cached

        match = await self._anime_pictures.get_by_exact_name(name)
        if match is None:
            for alias in tag.consequent_aliases:
                match = await self._anime_pictures.get_by_exact_name(
                    normalize_name(alias.antecedent_name)
                )
                if match is not None:
                    log.debug(
                        "Matched %r on Anime-Pictures via alias %r", name, alias.antecedent_name
                    )
                    break

        if match is None:
            return self._catalog.save(DBOnlyTag(id=name))

        match = await self._follow_anime_pictures_aliases(match)
        if match.name == name:
            unified: UnifiedTag = BothEqualTag(id=name, ru_name=match.ru_name)
        else:
            unified = BothDifferentTag(id=name, ap_name=match.name, ru_name=match.ru_name)
        return self._catalog.save(unified)

    async def resolve_by_english_name(self, name: str) -> UnifiedTag | None:
        """Look a tag up by English name in either source; ``None`` if neither knows it."""

        key = normalize_english_key(name)
        return await self._english_lookups.run(key, lambda: self._lookup_english(key))

    async def resolve_by_localized_name(self, name: str) -> UnifiedTag | None:
        """Look a tag up by its Russian name.

        Only Anime-Pictures carries localized names, and its exact-name filter
        is what matches them; Danbooru is never consulted on this path.
        """

        key = name.strip()
        return await self._localized_lookups.run(key, lambda: self._lookup_localized(key))

    async def _lookup_english(self, key: str) -> UnifiedTag | None:
        cached = self._catalog.get(key)
        if cached is not None:
            return cached
        ap_tag = await self._anime_pictures.get_by_exact_name(key)
        if ap_tag is not None:
            return await self.resolve_from_anime_pictures(ap_tag)
        db_tag = await self._danbooru.get_by_exact_name(key)
        if db_tag is not None:
            return await self.resolve_from_danbooru(db_tag)
        log.info("No tag named %r on either source", key)
        return None

    async def _lookup_localized(self, key: str) -> UnifiedTag | None:
        cached = self._catalog.get_by_ru_name(key)
        if cached is not None:
            return cached
        ap_tag = await self._anime_pictures.get_by_exact_name(key)
        if ap_tag is not None:
            return await self.resolve_from_anime_pictures(ap_tag)
        return None

    async def _follow_anime_pictures_aliases(self, tag: AnimePicturesTag) -> AnimePicturesTag:
        visited = {tag.id}
        while tag.alias_id is not None:
            target = tag.alias
            if target is None or target.id != tag.alias_id:
                target = await self._anime_pictures.get_by_id(tag.alias_id)
            if target is None:
                log.warning(
                    "Anime-Pictures tag %r points to missing alias %s", tag.name, tag.alias_id
                )
                break
            if target.id in visited:
                log.warning("Anime-Pictures alias cycle at %r (id %s)", target.name, target.id)
                break
            visited.add(target.id)
            tag = target
        return tag

    async def _follow_danbooru_aliases(self, tag: DanbooruTag) -> DanbooruTag:
        visited = {tag.name}
        while tag.antecedent_alias is not None:
            target_name = tag.antecedent_alias.consequent_name
            if target_name in visited:
                log.warning("Danbooru alias cycle at %r", target_name)
                break
            target = await self._danbooru.get_by_exact_name(target_name)
            if target is None:
                log.warning("Danbooru tag %r redirects to missing %r", tag.name, target_name)
                break
            visited.add(target.name)
            tag = target
        return tag
