"""Exceptions raised by the documentation pipeline.

Every failure that reaches a caller is a :class:`DocsError` carrying a
human-readable message. Nothing in the package retries on its own.
"""

from __future__ import annotations

from typing import Optional


class DocsError(Exception):
    """Base class for all errors surfaced to callers."""


class InitializeClientError(DocsError):
    """Raised when a shared HTTP client cannot be constructed."""


class HttpError(DocsError):
    """Raised when a documentation page cannot be fetched."""

    def __init__(
        self, message: str, url: str = "", status_code: Optional[int] = None
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class SelectorConfigError(DocsError):
    """Raised when a configured CSS selector does not parse.

    This points at a defect in the selector configuration, not at the page
    being processed.
    """

    def __init__(self, message: str, selector: str = ""):
        self.selector = selector
        super().__init__(message)


class ContentNotFoundError(DocsError):
    """Raised when the expected content region is missing from a page."""

    def __init__(self, message: str, selector: str = ""):
        self.selector = selector
        super().__init__(message)


class QueryParseError(DocsError):
    """Raised when a search keyword is not a usable query."""

    def __init__(self, message: str, keyword: str = ""):
        self.keyword = keyword
        super().__init__(message)


class SearchIndexError(DocsError):
    """Raised when the per-query search index cannot be built or queried."""


class RegistryError(DocsError):
    """Raised when the crates.io lookup fails."""

    def __init__(self, message: str, keyword: str = ""):
        self.keyword = keyword
        super().__init__(message)


class InvalidPathError(DocsError, ValueError):
    """Raised when a documentation page path does not start with ``/``."""
