"""Translate Danbooru payloads into domain tags."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rusbooru.domain.model import DanbooruAlias, DanbooruCategory, DanbooruTag

if TYPE_CHECKING:
    from .schema import AliasPayload, TagPayload


def _alias(payload: AliasPayload) -> DanbooruAlias:
    return DanbooruAlias(
        antecedent_name=payload.antecedent_name,
        consequent_name=payload.consequent_name,
        status=payload.status,
    )


def translate_tag(payload: TagPayload) -> DanbooruTag:
    try:
        category = DanbooruCategory(payload.category)
    except ValueError:
        category = DanbooruCategory.GENERAL
    return DanbooruTag(
        id=payload.id,
        name=payload.name,
        category=category,
        antecedent_alias=_alias(payload.antecedent_alias) if payload.antecedent_alias else None,
        consequent_aliases=tuple(_alias(alias) for alias in payload.consequent_aliases),
    )
