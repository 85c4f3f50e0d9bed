"""Parse a crate's ``all.html`` page into a typed item catalog."""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .config import DOCS_RS_SELECTORS, SelectorSet
from .document import Item
from .extractor import compile_selector

LOGGER = logging.getLogger(__name__)


def _attribute(tag: Tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def parse_catalog(
    markup: str, selectors: SelectorSet = DOCS_RS_SELECTORS
) -> List[Item]:
    """Build the catalog of items listed on an "all items" page.

    The Nth category heading is paired with the Nth item listing. When the
    page holds a different number of headings and listings the pairing
    stops at the shorter sequence and a warning is logged.

    Raises:
        SelectorConfigError: If any of the configured selectors is malformed.
    """
    heading_selector = compile_selector(selectors.catalog_heading)
    listing_selector = compile_selector(selectors.catalog_listing)
    anchor_selector = compile_selector(selectors.catalog_anchor)

    soup = BeautifulSoup(markup or "", "html.parser")
    headings = heading_selector.select(soup)
    listings = listing_selector.select(soup)

    if len(headings) != len(listings):
        LOGGER.warning(
            "Catalog page has %d headings but %d listings (selectors %s); "
            "pairing only the first %d",
            len(headings),
            len(listings),
            selectors.version,
            min(len(headings), len(listings)),
        )

    items: List[Item] = []
    for heading, listing in zip(headings, listings):
        category = heading.get_text().strip()
        for anchor in anchor_selector.select(listing):
            label = anchor.get_text()
            items.append(
                Item(
                    category=category,
                    href=_attribute(anchor, "href"),
                    label=label if label else None,
                )
            )

    LOGGER.debug("Parsed %d catalog items", len(items))
    return items
