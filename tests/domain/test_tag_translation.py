from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from rusbooru.domain.model import (
    AnimePicturesCategory,
    AnimePicturesTag,
    BothDifferentTag,
    DanbooruCategory,
)
from rusbooru.domain.translation import (
    danbooru_category,
    en_tags_to_ru_tags,
    ru_tags_to_en_tags,
    split_prefix,
    suggest,
    toggle_ru_tag,
)

if TYPE_CHECKING:
    from rusbooru.domain.reconciliation import ReconciliationEngine
    from tests.support.sources import FakeAnimePicturesSource, FakeDanbooruSource


@pytest.fixture
def sources(
    anime_pictures: FakeAnimePicturesSource, danbooru: FakeDanbooruSource
) -> tuple[FakeAnimePicturesSource, FakeDanbooruSource]:
    anime_pictures.add(AnimePicturesTag(id=1, name="sword", ru_name="меч"))
    anime_pictures.add(AnimePicturesTag(id=2, name="cat ears", ru_name="кошачьи ушки"))
    danbooru.add("cat_ears")
    danbooru.add("absurdres")
    return anime_pictures, danbooru


@pytest.mark.parametrize(
    ("part", "expected"),
    [
        ("sword", ("", "sword")),
        ("-sword", ("-", "sword")),
        ("-ch:hatsune_miku", ("-ch:", "hatsune_miku")),
        ("(~copyright:vocaloid", ("(~copyright:", "vocaloid")),
        ("chair", ("", "chair")),
    ],
)
def test_split_prefix(part: str, expected: tuple[str, str]) -> None:
    assert split_prefix(part) == expected


def test_danbooru_category_mapping() -> None:
    assert danbooru_category(AnimePicturesCategory.AUTHOR) is DanbooruCategory.ARTIST
    assert danbooru_category(AnimePicturesCategory.GAME_COPYRIGHT) is DanbooruCategory.COPYRIGHT
    assert danbooru_category(AnimePicturesCategory.META) is DanbooruCategory.META
    assert danbooru_category(AnimePicturesCategory.OBJECT) is DanbooruCategory.GENERAL


@pytest.mark.usefixtures("sources")
def test_ru_tags_to_en_tags(engine: ReconciliationEngine) -> None:
    result = asyncio.run(ru_tags_to_en_tags("меч, -кошачьи ушки, длинные волосы", engine))

    assert result == "sword -cat_ears длинные_волосы"


@pytest.mark.usefixtures("sources")
def test_ru_tags_to_en_tags_keeps_lines(engine: ReconciliationEngine) -> None:
    result = asyncio.run(ru_tags_to_en_tags("меч\nкошачьи ушки", engine))

    assert result == "sword\ncat_ears"


@pytest.mark.usefixtures("sources")
def test_en_tags_to_ru_tags(engine: ReconciliationEngine) -> None:
    result = asyncio.run(en_tags_to_ru_tags("cat_ears  -sword absurdres", engine))

    assert result == "кошачьи ушки, -меч, absurdres, "


@pytest.mark.usefixtures("sources")
def test_en_tags_to_ru_tags_unknown_tag_keeps_english(engine: ReconciliationEngine) -> None:
    result = asyncio.run(en_tags_to_ru_tags("long_hair", engine))

    assert result == "long hair, "


def test_toggle_ru_tag_removes_present_tag() -> None:
    assert toggle_ru_tag("меч, щит, ", "щит") == "меч, "


def test_toggle_ru_tag_appends_missing_tag() -> None:
    assert toggle_ru_tag("меч, ", "щит") == "меч, щит,"
    assert toggle_ru_tag("", "меч") == " меч,"


def test_toggle_ru_tag_keeps_line_breaks() -> None:
    assert toggle_ru_tag("меч,\nщит, лук", "щит") == "меч,\nлук"
    assert toggle_ru_tag("меч,\nщит", "щит") == "меч\n"


def test_suggest_unifies_hits_and_marks_aliases(
    engine: ReconciliationEngine,
    anime_pictures: FakeAnimePicturesSource,
    danbooru: FakeDanbooruSource,
) -> None:
    target = anime_pictures.add(
        AnimePicturesTag(
            id=2,
            name="nekomimi",
            ru_name="кошачьи ушки",
            category=AnimePicturesCategory.OBJECT,
            post_count=100,
        )
    )
    anime_pictures.add(AnimePicturesTag(id=3, name="neko", alias_id=2, alias=target, post_count=1))
    anime_pictures.add(AnimePicturesTag(id=4, name="neko sword", post_count=5))
    danbooru.add("nekomimi", alias_of="cat_ears")
    danbooru.add("cat_ears")

    suggestions = asyncio.run(suggest(" neko ", anime_pictures=anime_pictures, engine=engine))

    assert [item.label for item in suggestions] == [
        "кошачьи ушки",
        "neko → кошачьи ушки",
        "neko sword",
    ]
    assert [item.value for item in suggestions] == ["кошачьи ушки", "кошачьи ушки", "neko sword"]
    assert [item.matched for item in suggestions] == [True, True, False]
    assert suggestions[1].post_count == 100
    assert suggestions[0].category is DanbooruCategory.GENERAL
    assert suggestions[0].tag == BothDifferentTag(
        id="cat ears", ap_name="nekomimi", ru_name="кошачьи ушки"
    )
    assert anime_pictures.calls_of("search") == ["neko"]


def test_suggest_ignores_blank_query(
    engine: ReconciliationEngine, anime_pictures: FakeAnimePicturesSource
) -> None:
    assert asyncio.run(suggest("   ", anime_pictures=anime_pictures, engine=engine)) == []
    assert anime_pictures.calls == []
