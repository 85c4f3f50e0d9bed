"""Download raw documentation pages."""

from __future__ import annotations

import logging

import httpx

from .clients import LazyClient
from .document import RawPage
from .errors import HttpError

LOGGER = logging.getLogger(__name__)


class PageFetcher:
    """Fetch page bodies through a shared ``httpx.AsyncClient``.

    No retries and no caching beyond the client's connection pool.
    """

    def __init__(self, client: LazyClient[httpx.AsyncClient]):
        self._client = client

    async def get(self, url: str) -> RawPage:
        """Fetch *url* and return its body.

        Raises:
            HttpError: On a network failure or a non-2xx response.
            InitializeClientError: If the shared client cannot be built.
        """
        client = await self._client.get()
        LOGGER.debug("GET %s", url)
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            LOGGER.error("HTTP %d for %s", status, url)
            raise HttpError(
                f"HTTP request error: {status} for {url}",
                url=url,
                status_code=status,
            ) from exc
        except httpx.RequestError as exc:
            LOGGER.error("Request to %s failed: %s", url, exc)
            raise HttpError(f"HTTP request error: {exc}", url=url) from exc

        return RawPage(url=url, body=response.text)
