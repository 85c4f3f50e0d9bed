"""Data structures passed through the documentation pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True, frozen=True)
class RawPage:
    """Page body exactly as returned by the fetcher."""

    url: str
    body: str


@dataclass(slots=True, frozen=True)
class ExtractedFragment:
    """Inner markup of the single content region selected from a page."""

    markup: str


@dataclass(slots=True, frozen=True)
class NormalizedDocument:
    """Markdown rendition of a documentation page."""

    url: str
    text: str


@dataclass(slots=True, frozen=True)
class Item:
    """One entry of a crate's "all items" listing.

    ``category`` is the heading the entry was listed under (``Structs``,
    ``Functions``, ...). Items carry no identity of their own, so two
    entries with the same fields are equal but both are kept.
    """

    category: str
    href: Optional[str] = None
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class PackageRecord:
    """Crate summary as reported by crates.io."""

    name: str
    latest_version: str
    downloads: int = 0
    description: Optional[str] = None
    latest_stable_version: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary, dropping absent fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}
