"""HTTP client for the Anime-Pictures tag API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from rusbooru.adapters.http_resilience import ResilientClient
from rusbooru.config.anime_pictures import AnimePicturesConfig, get_anime_pictures_config

from .schema import TagListResponse, TagResponse, TagSearchResponse
from .translator import translate_tag

if TYPE_CHECKING:
    from rusbooru.domain.model import AnimePicturesTag
    from rusbooru.domain.ports.sources import AnimePicturesSource

    from .schema import TagPayload

log = getLogger(__name__)

SEARCH_LIMIT = 20


class AnimePicturesAPIError(RuntimeError):
    """Raised when Anime-Pictures answers with an unexpected payload."""


class AnimePicturesClient:
    """Tag lookups against Anime-Pictures.

    Tags returned from searches and lookups come with their alias target
    fetched one hop deep; alias lists are returned as-is.
    """

    def __init__(
        self,
        *,
        config: AnimePicturesConfig | None = None,
        client: ResilientClient | None = None,
    ) -> None:
        self._config = config or get_anime_pictures_config()
        self._client = client or ResilientClient(self._config.resilience)

    @property
    def http(self) -> ResilientClient:
        return self._client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def search_by_partial_name(self, text: str) -> list[AnimePicturesTag]:
        payload = await self._get(
            "tags",
            params={"tag:smart_like": text.lower(), "order": "num", "limit": SEARCH_LIMIT},
        )
        response = TagSearchResponse.model_validate(payload)
        return list(await asyncio.gather(*(self._with_alias(tag) for tag in response.tags)))

    async def get_by_id(self, tag_id: int) -> AnimePicturesTag | None:
        payload = await self._fetch_tag(tag_id)
        if payload is None:
            return None
        return await self._with_alias(payload)

    async def get_by_exact_name(self, name: str) -> AnimePicturesTag | None:
        payload = await self._get("tags", params={"tag": name.lower()})
        response = TagSearchResponse.model_validate(payload)
        if not response.tags:
            return None
        if len(response.tags) > 1:
            log.warning(
                "Found %s Anime-Pictures tags named %r: %s",
                len(response.tags),
                name,
                [tag.tag for tag in response.tags],
            )
        return await self._with_alias(response.tags[0])

    async def get_aliases_of(self, tag_id: int) -> list[AnimePicturesTag]:
        payload = await self._get(f"tags/{tag_id}/aliases")
        response = TagListResponse.model_validate(payload)
        return [translate_tag(tag) for tag in response.tags]

    async def _with_alias(self, payload: TagPayload) -> AnimePicturesTag:
        if payload.alias is None:
            return translate_tag(payload)
        target = await self._fetch_tag(payload.alias)
        return translate_tag(payload, alias=translate_tag(target) if target else None)

    async def _fetch_tag(self, tag_id: int) -> TagPayload | None:
        try:
            payload = await self._get(f"tags/{tag_id}")
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.NOT_FOUND:
                return None
            raise
        return TagResponse.model_validate(payload).tag

    async def _get(
        self, path: str, *, params: dict[str, str | int] | None = None
    ) -> dict[str, object]:
        payload = await self._client.get_json(path, params=params)
        if not isinstance(payload, dict):
            raise AnimePicturesAPIError("Unexpected Anime-Pictures response payload")
        return payload


if TYPE_CHECKING:
    _source_check: AnimePicturesSource = AnimePicturesClient()
