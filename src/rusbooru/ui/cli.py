# ruff: noqa: T201

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from rusbooru.app import open_tag_context
from rusbooru.config import configure_logging
from rusbooru.domain.model import BothDifferentTag
from rusbooru.domain.translation import en_tags_to_ru_tags, ru_tags_to_en_tags, suggest

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from rusbooru.app import TagContext
    from rusbooru.domain.model import UnifiedTag

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Translate tags between Danbooru and Anime-Pictures"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lookup_en = subparsers.add_parser("lookup-en", help="Resolve a tag by its English name")
    lookup_en.add_argument("name", help="Tag name, with spaces or underscores")

    lookup_ru = subparsers.add_parser("lookup-ru", help="Resolve a tag by its Russian name")
    lookup_ru.add_argument("name", help="Localized tag name (case-sensitive)")

    to_en = subparsers.add_parser("to-en", help="Convert comma-separated Russian tags")
    to_en.add_argument("text", help="Tags such as 'меч, кошачьи ушки'")

    to_ru = subparsers.add_parser("to-ru", help="Convert a Danbooru tag query")
    to_ru.add_argument("text", help="Tags such as 'sword cat_ears'")

    suggest_parser = subparsers.add_parser("suggest", help="Complete a partial tag name")
    suggest_parser.add_argument("query", help="Beginning of a tag name in any language")

    subparsers.add_parser("cache-info", help="Show the number of cached tags")
    subparsers.add_parser("cache-clear", help="Forget every cached tag")

    return parser.parse_args(list(argv))


def format_tag(tag: UnifiedTag) -> str:
    parts = [tag.id, f"[{tag.kind.name.lower().replace('_', '-')}]"]
    if isinstance(tag, BothDifferentTag):
        parts.append(f"anime-pictures={tag.ap_name}")
    if tag.ru_name:
        parts.append(f"ru={tag.ru_name}")
    return " ".join(parts)


async def _run(args: argparse.Namespace, context: TagContext) -> int:
    engine = context.engine
    match args.command:
        case "lookup-en" | "lookup-ru":
            tag = (
                await engine.resolve_by_english_name(args.name)
                if args.command == "lookup-en"
                else await engine.resolve_by_localized_name(args.name)
            )
            if tag is None:
                print(f"No tag found for {args.name!r}", file=sys.stderr)
                return 1
            print(format_tag(tag))
        case "to-en":
            print(await ru_tags_to_en_tags(args.text, engine))
        case "to-ru":
            print(await en_tags_to_ru_tags(args.text, engine))
        case "suggest":
            for item in await suggest(
                args.query, anime_pictures=context.anime_pictures, engine=engine
            ):
                marker = " " if item.matched else "~"
                print(
                    f"{marker} {item.label}  ({item.category.name.lower()}, {item.post_count})"
                )
        case "cache-info":
            cache = context.catalog.cache
            print(f"{cache.name}: {cache.size} tags, rotated at {cache.rotation_timestamp}")
        case "cache-clear":
            context.catalog.clear()
            print("Tag cache cleared")
        case _:
            raise ValueError(f"Unsupported command: {args.command}")
    return 0


async def _main_async(args: argparse.Namespace) -> int:
    async with open_tag_context() as context:
        return await _run(args, context)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.WARNING)

    try:
        exit_code = asyncio.run(_main_async(parsed_args))
    except Exception:
        log.exception("Fatal error during lookup")
        sys.exit(1)
    sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
