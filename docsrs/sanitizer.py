"""Regex-based removal of presentation noise from rustdoc fragments."""

from __future__ import annotations

import re
from typing import List, Pattern

from .config import CHROME_TAGS

CLASS_ATTRIBUTE = re.compile(r"""\sclass=(".*?"|'.*?')""")

# An unterminated block runs to the end of the input.
SCRIPT_BLOCK = re.compile(r"<script.*?(?:</script\s*>|\Z)", re.IGNORECASE | re.DOTALL)


def _block_pattern(tag: str) -> Pattern[str]:
    name = re.escape(tag)
    return re.compile(rf"<{name}.*?(?:</{name}\s*>|\Z)", re.IGNORECASE | re.DOTALL)


CHROME_BLOCKS: List[Pattern[str]] = [_block_pattern(tag) for tag in CHROME_TAGS]


def _sanitize_once(markup: str) -> str:
    result = CLASS_ATTRIBUTE.sub("", markup)
    result = SCRIPT_BLOCK.sub("", result)
    for pattern in CHROME_BLOCKS:
        result = pattern.sub("", result)
    return result


def sanitize(markup: str) -> str:
    """Strip class attributes, script blocks and toolbar chrome.

    Passes repeat until the text stops changing, so removing one block can
    never expose another and ``sanitize(sanitize(m)) == sanitize(m)``.
    """
    current = markup or ""
    while True:
        cleaned = _sanitize_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned
