"""Command-line interface for docs.rs retrieval and search."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .cli_config import load_config
from .cli_output import (
    crates_to_json,
    format_crates_markdown,
    format_items_markdown,
    items_to_json,
    write_output,
)
from .cli_parsers import parse_args
from .docs import DocsService
from .document import NormalizedDocument
from .errors import DocsError


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _format_page(doc: NormalizedDocument, json_output: bool) -> str:
    if json_output:
        return json.dumps(
            {"url": doc.url, "markdown": doc.text}, indent=2, ensure_ascii=False
        )
    return doc.text


async def _dispatch(args: argparse.Namespace, service: DocsService) -> str:
    command = args.command

    if command == "index":
        doc = await service.fetch_index_page(
            args.crate, args.crate_version, remove_links=args.remove_links
        )
        return _format_page(doc, args.json_output)

    if command == "page":
        doc = await service.fetch_page(
            args.crate, args.crate_version, args.path, remove_links=args.remove_links
        )
        return _format_page(doc, args.json_output)

    if command == "items":
        items = await service.fetch_all_items(args.crate, args.crate_version)
        logging.info("Found %d items", len(items))
        if args.json_output:
            return items_to_json(items)
        return format_items_markdown(
            items, f"{args.crate} {args.crate_version}: all items"
        )

    if command == "find":
        items = await service.search_items(
            args.crate, args.crate_version, args.keyword
        )
        if args.json_output:
            return items_to_json(items)
        return format_items_markdown(
            items, f"{args.crate} {args.crate_version}: {args.keyword}"
        )

    if command == "crates":
        records = await service.search_crates(args.keyword)
        if args.json_output:
            return crates_to_json(records)
        return format_crates_markdown(records, args.keyword)

    raise ValueError(f"Unknown command: {command}")


async def _run_async(
    args: argparse.Namespace, service: Optional[DocsService] = None
) -> int:
    """Main async entry point; builds and closes a service unless one is given."""
    owned = service is None
    active = service or DocsService.from_config()
    try:
        output = await _dispatch(args, active)
    except DocsError as exc:
        logging.error("%s", exc)
        return 1
    finally:
        if owned:
            await active.aclose()

    write_output(output, args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the docsrs command."""
    args = parse_args(argv)
    _setup_logging(args.verbose)
    load_config()

    try:
        return asyncio.run(_run_async(args))
    except KeyboardInterrupt:
        logging.info("Interrupted")
        return 130
    except Exception as exc:
        logging.error("Error: %s", exc)
        if args.verbose:
            logging.exception("Full traceback:")
        return 1


if __name__ == "__main__":
    sys.exit(main())
