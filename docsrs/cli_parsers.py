"""Argument parser construction for CLI commands."""

from __future__ import annotations

import argparse
from typing import List, Optional

from .config import LATEST_VERSION


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output to this file instead of stdout",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output as JSON instead of markdown",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_version_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version",
        dest="crate_version",
        type=str,
        default=LATEST_VERSION,
        help="Crate version, e.g. 1.0.0 (default: latest)",
    )


def _add_remove_links_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--remove-links",
        action="store_true",
        help="Remove all links from markdown output",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsrs",
        description="Read Rust crate documentation from docs.rs and crates.io.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  # Top page of the latest release
  docsrs index serde

  # A specific page of a specific version
  docsrs page serde /de/value/struct.BoolDeserializer.html --version 1.0.200

  # Every documented item, as JSON
  docsrs items tokio --json -o tokio-items.json

  # Keyword search over item names
  docsrs find serde Deserializer

  # Search crates.io
  docsrs crates "async http"
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    index = subparsers.add_parser("index", help="Fetch a crate's top page")
    index.add_argument("crate", help="Crate name")
    _add_version_arg(index)
    _add_remove_links_arg(index)
    _add_common_args(index)

    page = subparsers.add_parser("page", help="Fetch a page below the crate root")
    page.add_argument("crate", help="Crate name")
    page.add_argument(
        "path",
        help="Path after https://docs.rs/{crate}/{version}/{crate}, starting with '/'",
    )
    _add_version_arg(page)
    _add_remove_links_arg(page)
    _add_common_args(page)

    items = subparsers.add_parser("items", help="List every documented item")
    items.add_argument("crate", help="Crate name")
    _add_version_arg(items)
    _add_common_args(items)

    find = subparsers.add_parser("find", help="Keyword search over item names")
    find.add_argument("crate", help="Crate name")
    find.add_argument("keyword", help="Search keyword")
    _add_version_arg(find)
    _add_common_args(find)

    crates = subparsers.add_parser("crates", help="Search crates.io")
    crates.add_argument("keyword", help="Search keyword")
    _add_common_args(crates)

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
