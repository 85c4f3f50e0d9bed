"""Isolate the content region of a documentation page."""

from __future__ import annotations

import logging

import soupsieve
from bs4 import BeautifulSoup

from .document import ExtractedFragment
from .errors import ContentNotFoundError, SelectorConfigError

LOGGER = logging.getLogger(__name__)


def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile a configured CSS selector.

    Raises:
        SelectorConfigError: If the selector does not parse.
    """
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        LOGGER.error(
            "Invalid CSS selector %r: %s. The selector is part of the static "
            "configuration; please report this as a bug.",
            selector,
            exc,
        )
        raise SelectorConfigError(
            f"Failed to parse CSS selector {selector!r}: {exc}", selector=selector
        ) from exc


def extract_main_content(markup: str, selector: str) -> ExtractedFragment:
    """Return the inner markup of the first element matching *selector*.

    Later matches are ignored.

    Raises:
        SelectorConfigError: If *selector* is malformed.
        ContentNotFoundError: If nothing in *markup* matches.
    """
    compiled = compile_selector(selector)
    soup = BeautifulSoup(markup, "html.parser")
    match = compiled.select_one(soup)
    if match is None:
        raise ContentNotFoundError(f"Element not found: {selector}", selector=selector)
    return ExtractedFragment(markup=match.decode_contents())
