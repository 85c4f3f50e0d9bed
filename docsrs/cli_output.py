"""Output and formatting helpers for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from .document import Item, PackageRecord


def format_items_markdown(items: List[Item], title: str) -> str:
    """Format catalog items as markdown grouped by category.

    Example output:
    # serde 1.0.0: all items

    ## Structs
    - [de::value::BoolDeserializer](de/value/struct.BoolDeserializer.html)
    """
    lines = [f"# {title}", f"_Found {len(items)} items_", ""]

    current: Optional[str] = None
    for item in items:
        if item.category != current:
            if current is not None:
                lines.append("")
            lines.append(f"## {item.category}")
            current = item.category
        label = item.label or item.href or "(unnamed)"
        if item.href:
            lines.append(f"- [{label}]({item.href})")
        else:
            lines.append(f"- {label}")

    lines.append("")
    return "\n".join(lines)


def format_crates_markdown(records: List[PackageRecord], keyword: str) -> str:
    """Format crates.io search results as markdown."""
    lines = [f"# Crates: {keyword}", f"_Found {len(records)} results_", ""]

    for i, record in enumerate(records, 1):
        lines.append(f"## {i}. {record.name} {record.latest_version}")
        if record.description:
            lines.append(record.description.strip())
            lines.append("")
        details = [f"downloads: {record.downloads}"]
        if record.latest_stable_version:
            details.append(f"stable: {record.latest_stable_version}")
        if record.updated_at:
            details.append(f"updated: {record.updated_at}")
        lines.append(", ".join(details))
        lines.append("")
        lines.append("---")
        lines.append("")

    return "\n".join(lines)


def items_to_json(items: List[Item]) -> str:
    return json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)


def crates_to_json(records: List[PackageRecord]) -> str:
    return json.dumps(
        [record.to_dict() for record in records], indent=2, ensure_ascii=False
    )


def write_output(text: str, output: Optional[str]) -> None:
    """Print *text*, or write it to *output* when a path is given."""
    if output is None:
        print(text)
        return

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logging.info("Wrote %s", path)
