"""Runtime configuration and structural selectors for docs.rs pages."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_DOCS_BASE_URL = "https://docs.rs"
DEFAULT_REGISTRY_URL = "https://crates.io"
DEFAULT_USER_AGENT = "docsrs-mcp/0.1.0"
DEFAULT_TIMEOUT = 30.0

# Version token docs.rs resolves to the newest release
LATEST_VERSION = "latest"

SEARCH_RESULT_LIMIT = 10
REGISTRY_PAGE_SIZE = 10


@dataclass(frozen=True)
class SelectorSet:
    """CSS selectors describing where content lives on a documentation page.

    A change in the rustdoc page layout is handled by shipping a new set with
    a new ``version`` rather than by touching the parsing code.
    """

    version: str
    main_content: str
    catalog_heading: str
    catalog_listing: str
    catalog_anchor: str


DOCS_RS_SELECTORS = SelectorSet(
    version="rustdoc-2024",
    main_content="section#main-content",
    catalog_heading="section#main-content > h3",
    catalog_listing="section#main-content > ul.all-items",
    catalog_anchor="a",
)

# Custom elements rustdoc renders as page chrome
CHROME_TAGS: List[str] = [
    "rustdoc-toolbar",
]


def _parse_timeout(value: Optional[str], default: float) -> float:
    if not value:
        return default
    try:
        timeout = float(value)
    except ValueError:
        LOGGER.warning(
            "Invalid DOCSRS_HTTP_TIMEOUT '%s'; falling back to %.1fs.", value, default
        )
        return default
    if timeout <= 0:
        LOGGER.warning(
            "DOCSRS_HTTP_TIMEOUT must be positive, got %s; falling back to %.1fs.",
            value,
            default,
        )
        return default
    return timeout


@dataclass
class DocsConfig:
    """Endpoints and client settings shared by the fetcher and the registry."""

    docs_base_url: str = DEFAULT_DOCS_BASE_URL
    registry_url: str = DEFAULT_REGISTRY_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    selectors: SelectorSet = field(default=DOCS_RS_SELECTORS)

    @classmethod
    def from_env(cls) -> "DocsConfig":
        """Build a config from environment variables.

        Read at call time so that late ``.env`` loading and monkeypatched
        variables are honoured.
        """
        return cls(
            docs_base_url=(
                os.getenv("DOCSRS_BASE_URL") or DEFAULT_DOCS_BASE_URL
            ).rstrip("/"),
            registry_url=(
                os.getenv("CRATES_IO_URL") or DEFAULT_REGISTRY_URL
            ).rstrip("/"),
            user_agent=os.getenv("DOCSRS_USER_AGENT") or DEFAULT_USER_AGENT,
            timeout=_parse_timeout(os.getenv("DOCSRS_HTTP_TIMEOUT"), DEFAULT_TIMEOUT),
        )
