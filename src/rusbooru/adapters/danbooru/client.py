"""HTTP client for the Danbooru tag API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from rusbooru.adapters.http_resilience import ResilientClient
from rusbooru.config.danbooru import DanbooruConfig, get_danbooru_config

from .schema import TAG_FIELDS, TagListAdapter
from .translator import translate_tag

if TYPE_CHECKING:
    from rusbooru.domain.model import DanbooruTag
    from rusbooru.domain.ports.sources import DanbooruSource

log = getLogger(__name__)


class DanbooruAPIError(RuntimeError):
    """Raised when Danbooru answers with an unexpected payload."""


def to_danbooru_name(name: str) -> str:
    return name.strip().replace(" ", "_")


class DanbooruClient:
    """Exact-name tag lookups against a Danbooru-compatible site."""

    def __init__(
        self,
        *,
        config: DanbooruConfig | None = None,
        client: ResilientClient | None = None,
    ) -> None:
        self._config = config or get_danbooru_config()
        self._client = client or ResilientClient(self._config.resilience)

    @property
    def http(self) -> ResilientClient:
        return self._client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_by_exact_name(self, name: str) -> DanbooruTag | None:
        params: dict[str, str | int] = {
            "search[name]": to_danbooru_name(name),
            "only": ",".join(TAG_FIELDS),
        }
        credentials = self._config.credentials
        if credentials is not None:
            params["login"] = credentials.login
            params["api_key"] = credentials.api_key

        payload = await self._client.get_json("tags.json", params=params)
        try:
            tags = TagListAdapter.validate_python(payload)
        except ValidationError as exc:
            raise DanbooruAPIError(f"Unexpected Danbooru response payload for {name!r}") from exc
        if not tags:
            log.debug("Danbooru has no tag named %r", name)
            return None
        return translate_tag(tags[0])


if TYPE_CHECKING:
    _source_check: DanbooruSource = DanbooruClient()
