"""Convert sanitized rustdoc markup into Markdown."""

from __future__ import annotations

import re

from markdownify import MarkdownConverter

# Self-link rustdoc places next to every heading
_HEADING_ANCHOR_TEXT = frozenset({"§", ""})


class RustdocConverter(MarkdownConverter):
    """Markdown converter that drops rustdoc's interactive chrome."""

    def convert_a(self, el, text, *args, **kwargs):
        if text.strip() in _HEADING_ANCHOR_TEXT:
            return ""
        return super().convert_a(el, text, *args, **kwargs)

    def convert_button(self, el, text, *args, **kwargs):
        return ""


_CONVERTER = RustdocConverter(
    heading_style="ATX",
    bullets="-",
    code_language="rust",
)


def normalize(markup: str) -> str:
    """Render *markup* as Markdown.

    Malformed markup yields whatever the parser could recover; this never
    raises for bad input.
    """
    markdown = _CONVERTER.convert(markup or "")
    markdown = re.sub(r"[ \t]+\n", "\n", markdown)
    markdown = re.sub(r"\n{3,}", "\n\n", markdown)
    return markdown.strip()


def strip_markdown_links(text: str) -> str:
    """Remove markdown links from text, keeping only the link text."""
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    text = re.sub(r"https?://\S+", "", text)
    text = re.sub(r"  +", " ", text)
    return text
