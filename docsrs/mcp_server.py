"""MCP Server for Rust crate documentation.

Provides tools for:
- Searching crates on crates.io
- Reading docs.rs pages as markdown
- Listing and keyword-searching every item a crate documents

Supports both STDIO and HTTP transports.

Usage:
    # STDIO (for Claude Desktop, etc.)
    python -m docsrs.mcp_server

    # HTTP (for remote access)
    python -m docsrs.mcp_server --transport http --port 8000

    # Or via FastMCP CLI
    fastmcp run docsrs/mcp_server.py:mcp --transport http --port 8000

Environment Variables:
    DOCSRS_BASE_URL: docs.rs base URL (default: https://docs.rs)
    CRATES_IO_URL: crates.io base URL (default: https://crates.io)
    DOCSRS_USER_AGENT: User-Agent sent with every request
    DOCSRS_HTTP_TIMEOUT: Request timeout in seconds (default: 30)
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from .cli_config import load_config
from .config import DocsConfig
from .docs import DocsService
from .document import Item, PackageRecord
from .errors import DocsError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
LOGGER = logging.getLogger(__name__)

# Load .env before reading environment variables
load_config()

USAGE_URI = "resource://docsrs/usage"

USAGE_TEXT = """\
Exploring a crate:
1. search_crate finds crates on crates.io and reports their latest versions.
2. retrieve_documentation_index_page returns the crate's top page; its
   'Modules' section links to the top-level modules.
3. retrieve_documentation_page follows such a link. The path is the part of
   the URL after https://docs.rs/{crate}/{version}/{crate}, for example
   /de/value/struct.BoolDeserializer.html.

Finding an item without browsing:
- retrieve_documentation_all_items lists every documented item by category.
- search_documentation_items ranks those items against a keyword and returns
  the ten best matches with their paths.

Versions are exact release numbers such as 1.0.0, or 'latest'. Rust crates
often change their API between minor versions, so check the exact version.
"""

# Create the MCP server
mcp = FastMCP(
    name="Rust Docs",
    instructions="""
    Retrieve Rust crates and their documentation.

    1. Crate search:
       - search_crate: Search crates.io by keyword

    2. Documentation pages (markdown):
       - retrieve_documentation_index_page: Top page of a crate version
       - retrieve_documentation_page: Any page below the crate root

    3. Item catalog (JSON):
       - retrieve_documentation_all_items: Every documented item by category
       - search_documentation_items: Fuzzy keyword search over item names
    """,
)

_SERVICE: Optional[DocsService] = None


def get_service() -> DocsService:
    """Return the process-wide service, creating it on first use."""
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = DocsService.from_config(DocsConfig.from_env())
    return _SERVICE


def set_service(service: Optional[DocsService]) -> None:
    """Replace the process-wide service (``None`` resets it)."""
    global _SERVICE
    _SERVICE = service


def _items_to_json(items: List[Item]) -> str:
    return json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)


def _records_to_json(records: List[PackageRecord]) -> str:
    return json.dumps(
        [record.to_dict() for record in records], indent=2, ensure_ascii=False
    )


def _tool_error(exc: DocsError) -> ToolError:
    LOGGER.error("%s: %s", type(exc).__name__, exc)
    return ToolError(str(exc))


# =============================================================================
# CRATE SEARCH TOOL
# =============================================================================


@mcp.tool
async def search_crate(keyword: str) -> str:
    """
    Search for crates on crates.io and retrieve crate summaries.

    Args:
        keyword: Keyword for searching crates on crates.io. Searches by crate name.

    Returns:
        JSON array of up to 10 crates ordered by relevance, each with name,
        description, latest_stable_version, latest_version, downloads,
        created_at and updated_at.
    """
    try:
        records = await get_service().search_crates(keyword)
    except DocsError as exc:
        raise _tool_error(exc) from exc
    LOGGER.info("crates.io returned %d crate(s)", len(records))
    return _records_to_json(records)


# =============================================================================
# DOCUMENTATION PAGE TOOLS
# =============================================================================


@mcp.tool
async def retrieve_documentation_index_page(
    crate_name: str,
    version: str = "latest",
    remove_links: bool = False,
) -> str:
    """
    Retrieve the top page of a specific version of a crate from docs.rs.

    Rust crates often have significant API changes even with minor version
    updates, so always check the documentation for the exact version before
    providing information. To explore unknown structs or modules, start here
    and follow the links in the 'Modules' section.

    Args:
        crate_name: Name of the crate
        version: Crate version. For v1.0.0, use "1.0.0". For the latest version, use "latest".
        remove_links: Remove all links from the markdown output (default: false)

    Returns:
        The page content as markdown.
    """
    try:
        doc = await get_service().fetch_index_page(
            crate_name, version, remove_links=remove_links
        )
    except DocsError as exc:
        raise _tool_error(exc) from exc
    return doc.text


@mcp.tool
async def retrieve_documentation_page(
    crate_name: str,
    version: str,
    path: str,
    remove_links: bool = False,
) -> str:
    """
    Retrieve a documentation page from docs.rs.

    The URL follows the format https://docs.rs/{crate_name}/{version}/{crate_name}{path},
    such as https://docs.rs/serde/latest/serde/de/value/struct.BoolDeserializer.html.
    In this example, path is "/de/value/struct.BoolDeserializer.html".

    Args:
        crate_name: Name of the crate
        version: Crate version. For v1.0.0, use "1.0.0". For the latest version, use "latest".
        path: Exact link path starting with "/". This is not a search query.
        remove_links: Remove all links from the markdown output (default: false)

    Returns:
        The page content as markdown.
    """
    try:
        doc = await get_service().fetch_page(
            crate_name, version, path, remove_links=remove_links
        )
    except DocsError as exc:
        raise _tool_error(exc) from exc
    return doc.text


# =============================================================================
# ITEM CATALOG TOOLS
# =============================================================================


@mcp.tool
async def retrieve_documentation_all_items(
    crate_name: str,
    version: str = "latest",
) -> str:
    """
    List every item (structs, enums, traits, functions, macros, ...) a crate documents.

    Args:
        crate_name: Name of the crate
        version: Crate version. For v1.0.0, use "1.0.0". For the latest version, use "latest".

    Returns:
        JSON array of items with category, href (relative to the crate root)
        and label, in page order. Prefix href with "/" to use it as the path
        of retrieve_documentation_page.
    """
    try:
        items = await get_service().fetch_all_items(crate_name, version)
    except DocsError as exc:
        raise _tool_error(exc) from exc
    LOGGER.info("Catalog for %s %s has %d item(s)", crate_name, version, len(items))
    return _items_to_json(items)


@mcp.tool
async def search_documentation_items(
    crate_name: str,
    version: str,
    keyword: str,
) -> str:
    """
    Fuzzy-search the items of a crate by name.

    Args:
        crate_name: Name of the crate
        version: Crate version. For v1.0.0, use "1.0.0". For the latest version, use "latest".
        keyword: Words to look for in item names, e.g. "Deserializer".
            Supports AND/OR/NOT, "quoted phrases", * and ? wildcards and
            term~ for typo-tolerant matching.

    Returns:
        JSON array of up to 10 items, best match first.
    """
    try:
        items = await get_service().search_items(crate_name, version, keyword)
    except DocsError as exc:
        raise _tool_error(exc) from exc
    return _items_to_json(items)


# =============================================================================
# RESOURCES
# =============================================================================


@mcp.resource(USAGE_URI, name="usage", mime_type="text/plain")
def usage() -> str:
    """How the documentation tools fit together."""
    return USAGE_TEXT


# =============================================================================
# CLI ENTRY POINT
# =============================================================================


def main():
    """CLI entry point for running the MCP server."""
    parser = argparse.ArgumentParser(
        description="Run the Rust documentation MCP server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
    DOCSRS_BASE_URL      docs.rs base URL (default: https://docs.rs)
    CRATES_IO_URL        crates.io base URL (default: https://crates.io)
    DOCSRS_USER_AGENT    User-Agent sent with every request
    DOCSRS_HTTP_TIMEOUT  Request timeout in seconds (default: 30)

Examples:
    # STDIO transport (default, for Claude Desktop)
    python -m docsrs.mcp_server

    # HTTP transport (for remote access)
    python -m docsrs.mcp_server --transport http --port 8000

    # Custom host/port
    python -m docsrs.mcp_server --transport http --host 0.0.0.0 --port 9000
""",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to for HTTP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to for HTTP transport (default: 8000)",
    )

    args = parser.parse_args()

    config = DocsConfig.from_env()
    LOGGER.info("docs.rs URL: %s", config.docs_base_url)
    LOGGER.info("crates.io URL: %s", config.registry_url)

    if args.transport == "http":
        LOGGER.info("Starting MCP server on http://%s:%d/mcp", args.host, args.port)
        mcp.run(transport="http", host=args.host, port=args.port)
    else:
        LOGGER.info("Starting MCP server with STDIO transport")
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
