"""
Command-line entry point.

Usage:
    chapterkit search "dune" --max-results 10 --start-index 10
    chapterkit book zyTCAlFPjgYC
    chapterkit config init --path ./settings.toml
    chapterkit config import ./settings.toml
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

from chapterkit.infra.config import (
    ConfigAdapter,
    copy_default_config,
    load_config,
    save_config_file,
)
from chapterkit.infra.paths import DEFAULT_CONFIG_FILENAME
from chapterkit.providers import MetadataError, create_client
from chapterkit.providers.errors import MANUAL_ENTRY_HINT, ErrorPayload
from chapterkit.schemas.search import (
    FILTER_VALUES,
    ORDER_BY_VALUES,
    PRINT_TYPE_VALUES,
)
from chapterkit.services import BookSearchService, parse_search_query
from chapterkit.version import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chapterkit",
        description="Look up book metadata from the command line.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--config", type=Path, help="path to a TOML or JSON config")
    parser.add_argument("--log-level", help="override general.log_level")
    parser.add_argument("--provider", default="google_books")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="search the provider")
    search.add_argument("query")
    search.add_argument("--max-results", type=int, default=10)
    search.add_argument("--start-index", type=int, default=0)
    search.add_argument("--order-by", choices=ORDER_BY_VALUES, default="relevance")
    search.add_argument("--print-type", choices=PRINT_TYPE_VALUES, default="books")
    search.add_argument("--filter", choices=FILTER_VALUES)

    book = sub.add_parser("book", help="fetch a single volume")
    book.add_argument("book_id")

    config = sub.add_parser("config", help="manage the configuration file")
    config_sub = config.add_subparsers(dest="config_command", required=True)
    init = config_sub.add_parser("init", help="write the sample configuration")
    init.add_argument("--path", type=Path, default=Path(DEFAULT_CONFIG_FILENAME))
    init.add_argument("--force", action="store_true", help="overwrite existing file")
    imp = config_sub.add_parser("import", help="store a file as the user config")
    imp.add_argument("source", type=Path)

    return parser


def _dump(data: Any, stream: TextIO) -> None:
    json.dump(data, stream, indent=2, ensure_ascii=False)
    stream.write("\n")


async def _run_lookup(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    try:
        params = (
            parse_search_query(
                {
                    "q": args.query,
                    "maxResults": args.max_results,
                    "startIndex": args.start_index,
                    "orderBy": args.order_by,
                    "printType": args.print_type,
                    "filter": args.filter,
                }
            )
            if args.command == "search"
            else None
        )
        provider_cfg = adapter.get_provider_config(args.provider)
        client = create_client(args.provider, provider_cfg)
        async with client:
            service = BookSearchService(client)
            if params is not None:
                result: Any = await service.search(params)
            else:
                result = await service.get_by_id(args.book_id)
    except MetadataError as e:
        _dump(e.to_payload(), sys.stderr)
        return 1
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    if result is None:
        _dump(
            ErrorPayload(
                error="Book not found",
                details=f"No volume with id {args.book_id!r}",
                fallback=MANUAL_ENTRY_HINT,
            ),
            sys.stderr,
        )
        return 1

    _dump(result, sys.stdout)
    return 0


def _config_command(args: argparse.Namespace) -> int:
    if args.config_command == "import":
        try:
            written = save_config_file(args.source)
        except (FileNotFoundError, ValueError) as e:
            print(f"Cannot import configuration: {e}", file=sys.stderr)
            return 2
        print(f"Imported {args.source} into {written}")
        return 0

    target: Path = args.path.expanduser()
    if copy_default_config(target, overwrite=args.force):
        print(f"Wrote {target}")
        return 0
    print(f"{target} already exists (use --force to overwrite)", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "config":
        logging.basicConfig(level=args.log_level or "INFO", format=LOG_FORMAT)
        return _config_command(args)

    try:
        raw = load_config(args.config, required=args.config is not None)
    except (FileNotFoundError, ValueError) as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 2

    adapter = ConfigAdapter(raw)
    logging.basicConfig(
        level=(args.log_level or adapter.get_log_level()).upper(),
        format=LOG_FORMAT,
    )
    logger.debug("Running %s with provider %s", args.command, args.provider)

    return asyncio.run(_run_lookup(args, adapter))

