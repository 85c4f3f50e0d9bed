"""Documentation retrieval pipeline for docs.rs.

Page requests run fetch -> extract -> sanitize -> normalize; catalog
requests run fetch -> parse, optionally followed by a keyword search.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from .clients import LazyClient, build_http_client, build_registry_client
from .catalog import parse_catalog
from .config import LATEST_VERSION, SEARCH_RESULT_LIMIT, DocsConfig
from .document import Item, NormalizedDocument, PackageRecord
from .errors import InvalidPathError
from .extractor import extract_main_content
from .fetcher import PageFetcher
from .index import search_catalog
from .normalizer import normalize, strip_markdown_links
from .registry import CratesIoRegistry
from .sanitizer import sanitize

LOGGER = logging.getLogger(__name__)


def index_page_url(base_url: str, crate_name: str, version: str = LATEST_VERSION) -> str:
    return f"{base_url}/{crate_name}/{version}/{crate_name}/index.html"


def page_url(base_url: str, crate_name: str, version: str, path: str) -> str:
    """URL of an arbitrary page; *path* is relative to the crate root.

    Raises:
        InvalidPathError: If *path* does not start with ``/``.
    """
    if not path.startswith("/"):
        raise InvalidPathError(f"Path must start with '/': {path!r}")
    return f"{base_url}/{crate_name}/{version}/{crate_name}{path}"


def all_items_url(base_url: str, crate_name: str, version: str = LATEST_VERSION) -> str:
    return f"{base_url}/{crate_name}/{version}/{crate_name}/all.html"


class DocsService:
    """Entry point for the five documentation operations.

    Collaborators are passed in so tests can substitute them; use
    :meth:`from_config` for the real HTTP-backed wiring.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        registry: CratesIoRegistry,
        config: Optional[DocsConfig] = None,
        clients: Optional[List[LazyClient]] = None,
    ):
        self.fetcher = fetcher
        self.registry = registry
        self.config = config or DocsConfig()
        self._clients = list(clients or [])

    @classmethod
    def from_config(cls, config: Optional[DocsConfig] = None) -> "DocsService":
        """Build a service whose HTTP clients are created on first use."""
        config = config or DocsConfig.from_env()
        http_client = LazyClient(lambda: build_http_client(config), name="docs.rs client")
        registry_client = LazyClient(
            lambda: build_registry_client(config), name="crates.io client"
        )
        return cls(
            fetcher=PageFetcher(http_client),
            registry=CratesIoRegistry(registry_client),
            config=config,
            clients=[http_client, registry_client],
        )

    async def aclose(self) -> None:
        for client in self._clients:
            await client.aclose()

    async def __aenter__(self) -> "DocsService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _fetch_normalized(self, url: str, remove_links: bool) -> NormalizedDocument:
        page = await self.fetcher.get(url)
        fragment = extract_main_content(page.body, self.config.selectors.main_content)
        text = normalize(sanitize(fragment.markup))
        if remove_links:
            text = strip_markdown_links(text)
        return NormalizedDocument(url=url, text=text)

    async def fetch_index_page(
        self,
        crate_name: str,
        version: str = LATEST_VERSION,
        *,
        remove_links: bool = False,
    ) -> NormalizedDocument:
        """Fetch the top page of a crate as Markdown."""
        url = index_page_url(self.config.docs_base_url, crate_name, version)
        LOGGER.info("Fetching index page %s", url)
        return await self._fetch_normalized(url, remove_links)

    async def fetch_page(
        self,
        crate_name: str,
        version: str,
        path: str,
        *,
        remove_links: bool = False,
    ) -> NormalizedDocument:
        """Fetch the page at *path* below the crate root as Markdown."""
        url = page_url(self.config.docs_base_url, crate_name, version, path)
        LOGGER.info("Fetching page %s", url)
        return await self._fetch_normalized(url, remove_links)

    async def fetch_all_items(
        self, crate_name: str, version: str = LATEST_VERSION
    ) -> List[Item]:
        """Fetch and parse the crate's "all items" page."""
        url = all_items_url(self.config.docs_base_url, crate_name, version)
        LOGGER.info("Fetching item catalog %s", url)
        page = await self.fetcher.get(url)
        return parse_catalog(page.body, self.config.selectors)

    async def search_items(
        self,
        crate_name: str,
        version: str,
        keyword: str,
        limit: int = SEARCH_RESULT_LIMIT,
    ) -> List[Item]:
        """Rank the crate's catalog against *keyword*; at most 10 items."""
        items = await self.fetch_all_items(crate_name, version)
        results = await asyncio.to_thread(search_catalog, items, keyword, limit)
        LOGGER.info(
            "Keyword %r matched %d item(s) in %s %s",
            keyword,
            len(results),
            crate_name,
            version,
        )
        return results

    async def search_crates(self, keyword: str) -> List[PackageRecord]:
        """Search crates.io for crates matching *keyword*."""
        LOGGER.info("Searching crates.io for: %s", keyword)
        return await self.registry.search_packages(keyword)
