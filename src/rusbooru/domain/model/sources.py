"""Tags as the two external authorities describe them."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import AnimePicturesCategory, DanbooruCategory


@dataclass(frozen=True, slots=True, kw_only=True)
class AnimePicturesTag:
    """An Anime-Pictures tag.

    ``alias_id`` marks the tag as an alias of another one. ``alias`` holds that
    target when the adapter fetched it; the target is referenced, not owned,
    and its own ``alias`` is left unresolved.
    """

    id: int
    name: str
    ru_name: str | None = None
    ja_name: str | None = None
    category: AnimePicturesCategory = AnimePicturesCategory.UNKNOWN
    post_count: int = 0
    public_post_count: int = 0
    alias_id: int | None = None
    alias: AnimePicturesTag | None = None

    @property
    def is_alias(self) -> bool:
        return self.alias_id is not None


@dataclass(frozen=True, slots=True, kw_only=True)
class DanbooruAlias:
    """Redirect from ``antecedent_name`` to ``consequent_name``."""

    antecedent_name: str
    consequent_name: str
    status: str = "active"


@dataclass(frozen=True, slots=True, kw_only=True)
class DanbooruTag:
    id: int
    name: str
    category: DanbooruCategory = DanbooruCategory.GENERAL
    antecedent_alias: DanbooruAlias | None = None
    consequent_aliases: tuple[DanbooruAlias, ...] = field(default_factory=tuple)
