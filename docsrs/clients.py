"""Process-wide HTTP clients, created on first use.

Each client is built at most once per :class:`LazyClient`, even when many
coroutines ask for it at the same time, and is shared read-only afterwards.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, Optional, TypeVar

import httpx

from .config import DocsConfig
from .errors import InitializeClientError

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class LazyClient(Generic[T]):
    """Async once-cell around a client factory."""

    def __init__(self, factory: Callable[[], T], name: str = "client"):
        self._factory = factory
        self._name = name
        self._instance: Optional[T] = None
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._instance is not None

    async def get(self) -> T:
        """Return the shared instance, constructing it on the first call.

        Raises:
            InitializeClientError: If the factory fails. The next call tries
                again.
        """
        if self._instance is not None:
            return self._instance
        async with self._lock:
            if self._instance is None:
                try:
                    self._instance = self._factory()
                except Exception as exc:
                    LOGGER.error("Failed to initialize %s: %s", self._name, exc)
                    raise InitializeClientError(
                        f"Failed to initialize client: {exc}"
                    ) from exc
                LOGGER.debug("Initialized %s", self._name)
        return self._instance

    async def aclose(self) -> None:
        """Close the instance if it was ever created."""
        async with self._lock:
            instance, self._instance = self._instance, None
        close = getattr(instance, "aclose", None)
        if close is not None:
            await close()


def build_http_client(config: DocsConfig) -> httpx.AsyncClient:
    """Client used to download documentation pages."""
    return httpx.AsyncClient(
        headers={
            "User-Agent": config.user_agent,
            "Accept": "text/html",
        },
        timeout=config.timeout,
        follow_redirects=True,
    )


def build_registry_client(config: DocsConfig) -> httpx.AsyncClient:
    """Client bound to the crates.io API."""
    return httpx.AsyncClient(
        base_url=config.registry_url,
        headers={
            "User-Agent": config.user_agent,
            "Accept": "application/json",
        },
        timeout=config.timeout,
    )
