"""Rust crate documentation retrieval and search.

This module provides a clean API for reading docs.rs pages as markdown and
for finding items and crates. It supports:

- The top page of a crate version
- Any page below the crate root
- The full item catalog of a crate ("all items")
- Keyword search over the item catalog
- crates.io crate search

Example usage:

    from docsrs import fetch_index_page, search_items, search_crates

    # Top page
    doc = fetch_index_page("serde", "latest")
    print(doc.text)

    # Keyword search over every documented item
    for item in search_items("serde", "latest", "Deserializer"):
        print(item.category, item.label, item.href)

    # Async usage with a shared service
    from docsrs import DocsService, fetch_page_async

    async with DocsService.from_config() as service:
        page = await fetch_page_async(
            "serde", "latest", "/de/value/struct.BoolDeserializer.html",
            service=service,
        )
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional, TypeVar

from .catalog import parse_catalog
from .config import LATEST_VERSION, DocsConfig, SelectorSet
from .docs import DocsService
from .document import Item, NormalizedDocument, PackageRecord
from .errors import (
    ContentNotFoundError,
    DocsError,
    HttpError,
    InitializeClientError,
    InvalidPathError,
    QueryParseError,
    RegistryError,
    SearchIndexError,
    SelectorConfigError,
)
from .extractor import extract_main_content
from .index import search_catalog
from .normalizer import normalize
from .sanitizer import sanitize

__all__ = [
    # Data types
    "Item",
    "NormalizedDocument",
    "PackageRecord",
    # Errors
    "DocsError",
    "InitializeClientError",
    "HttpError",
    "SelectorConfigError",
    "ContentNotFoundError",
    "QueryParseError",
    "SearchIndexError",
    "RegistryError",
    "InvalidPathError",
    # Pipeline stages
    "extract_main_content",
    "sanitize",
    "normalize",
    "parse_catalog",
    "search_catalog",
    # Service and config
    "DocsService",
    "DocsConfig",
    "SelectorSet",
    # Operations
    "fetch_index_page",
    "fetch_index_page_async",
    "fetch_page",
    "fetch_page_async",
    "fetch_all_items",
    "fetch_all_items_async",
    "search_items",
    "search_items_async",
    "search_crates",
    "search_crates_async",
    # MCP Server
    "mcp",
]

T = TypeVar("T")


def get_mcp_server():
    """Get the MCP server instance (lazy import to avoid dependency if not needed)."""
    from .mcp_server import mcp

    return mcp


# Lazy import for mcp to avoid requiring fastmcp if not used
def __getattr__(name):
    if name == "mcp":
        from .mcp_server import mcp

        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


async def _with_service(
    service: Optional[DocsService],
    call: Callable[[DocsService], Awaitable[T]],
) -> T:
    if service is not None:
        return await call(service)
    async with DocsService.from_config() as owned:
        return await call(owned)


async def fetch_index_page_async(
    crate_name: str,
    version: str = LATEST_VERSION,
    *,
    remove_links: bool = False,
    service: Optional[DocsService] = None,
) -> NormalizedDocument:
    """
    Fetch the top page of a crate version as markdown.

    Args:
        crate_name: Name of the crate.
        version: Exact version or ``"latest"``.
        remove_links: Strip markdown links from the result.
        service: Optional service to reuse; a temporary one is used otherwise.

    Raises:
        HttpError: If the page cannot be fetched.
        ContentNotFoundError: If the page has no main content section.
    """
    return await _with_service(
        service,
        lambda s: s.fetch_index_page(crate_name, version, remove_links=remove_links),
    )


def fetch_index_page(
    crate_name: str,
    version: str = LATEST_VERSION,
    *,
    remove_links: bool = False,
) -> NormalizedDocument:
    """Synchronous wrapper for fetch_index_page_async."""
    return asyncio.run(
        fetch_index_page_async(crate_name, version, remove_links=remove_links)
    )


async def fetch_page_async(
    crate_name: str,
    version: str,
    path: str,
    *,
    remove_links: bool = False,
    service: Optional[DocsService] = None,
) -> NormalizedDocument:
    """
    Fetch a page below the crate root as markdown.

    Raises:
        InvalidPathError: If *path* does not start with ``/``.
        HttpError: If the page cannot be fetched.
        ContentNotFoundError: If the page has no main content section.
    """
    return await _with_service(
        service,
        lambda s: s.fetch_page(crate_name, version, path, remove_links=remove_links),
    )


def fetch_page(
    crate_name: str,
    version: str,
    path: str,
    *,
    remove_links: bool = False,
) -> NormalizedDocument:
    """Synchronous wrapper for fetch_page_async."""
    return asyncio.run(
        fetch_page_async(crate_name, version, path, remove_links=remove_links)
    )


async def fetch_all_items_async(
    crate_name: str,
    version: str = LATEST_VERSION,
    *,
    service: Optional[DocsService] = None,
) -> List[Item]:
    """Fetch the full item catalog of a crate version."""
    return await _with_service(
        service, lambda s: s.fetch_all_items(crate_name, version)
    )


def fetch_all_items(crate_name: str, version: str = LATEST_VERSION) -> List[Item]:
    """Synchronous wrapper for fetch_all_items_async."""
    return asyncio.run(fetch_all_items_async(crate_name, version))


async def search_items_async(
    crate_name: str,
    version: str,
    keyword: str,
    *,
    service: Optional[DocsService] = None,
) -> List[Item]:
    """
    Rank a crate's items against *keyword* and return the best ten.

    Raises:
        QueryParseError: If *keyword* is not a valid query.
        SearchIndexError: If the search index cannot be built.
    """
    return await _with_service(
        service, lambda s: s.search_items(crate_name, version, keyword)
    )


def search_items(crate_name: str, version: str, keyword: str) -> List[Item]:
    """Synchronous wrapper for search_items_async."""
    return asyncio.run(search_items_async(crate_name, version, keyword))


async def search_crates_async(
    keyword: str,
    *,
    service: Optional[DocsService] = None,
) -> List[PackageRecord]:
    """Search crates.io; up to ten crates ordered by relevance."""
    return await _with_service(service, lambda s: s.search_crates(keyword))


def search_crates(keyword: str) -> List[PackageRecord]:
    """Synchronous wrapper for search_crates_async."""
    return asyncio.run(search_crates_async(keyword))
