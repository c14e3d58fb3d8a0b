"""Ports for the two tag authorities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rusbooru.domain.model import AnimePicturesTag, DanbooruTag


@runtime_checkable
class AnimePicturesSource(Protocol):
    """Lookups against Anime-Pictures. "Not found" is ``None``, never an error."""

    async def search_by_partial_name(self, text: str) -> list[AnimePicturesTag]: ...

    async def get_by_id(self, tag_id: int) -> AnimePicturesTag | None: ...

    async def get_by_exact_name(self, name: str) -> AnimePicturesTag | None: ...

    async def get_aliases_of(self, tag_id: int) -> list[AnimePicturesTag]: ...


@runtime_checkable
class DanbooruSource(Protocol):
    """Lookups against Danbooru; results carry inline alias records."""

    async def get_by_exact_name(self, name: str) -> DanbooruTag | None: ...


__all__ = ["AnimePicturesSource", "DanbooruSource"]
