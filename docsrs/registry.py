"""crates.io package metadata search.

Ranking is left to crates.io; this module only requests the first page of
relevance-sorted results and maps each record to a :class:`PackageRecord`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from .clients import LazyClient
from .config import REGISTRY_PAGE_SIZE
from .document import PackageRecord
from .errors import RegistryError

LOGGER = logging.getLogger(__name__)

CRATES_ENDPOINT = "/api/v1/crates"


def normalize_timestamp(value: Optional[str]) -> Optional[str]:
    """Re-emit a crates.io timestamp as RFC 3339.

    Values that do not parse are returned unchanged.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        LOGGER.warning("Unrecognized timestamp from crates.io: %r", value)
        return value
    return parsed.isoformat()


def _raw_to_record(raw: Dict[str, Any]) -> PackageRecord:
    """Convert a raw crates.io crate dict into a ``PackageRecord``."""
    return PackageRecord(
        name=raw.get("name") or "",
        description=raw.get("description"),
        latest_stable_version=raw.get("max_stable_version"),
        latest_version=raw.get("max_version") or "",
        downloads=int(raw.get("downloads") or 0),
        created_at=normalize_timestamp(raw.get("created_at")),
        updated_at=normalize_timestamp(raw.get("updated_at")),
    )


class CratesIoRegistry:
    """Keyword search against the crates.io API."""

    def __init__(
        self,
        client: LazyClient[httpx.AsyncClient],
        page_size: int = REGISTRY_PAGE_SIZE,
    ):
        self._client = client
        self._page_size = page_size

    async def search_packages(self, keyword: str) -> List[PackageRecord]:
        """Return up to ``page_size`` crates matching *keyword*.

        Raises:
            RegistryError: On an HTTP error, network error, or malformed reply.
            InitializeClientError: If the shared client cannot be built.
        """
        client = await self._client.get()
        params: Dict[str, Any] = {
            "q": keyword,
            "page": 1,
            "per_page": self._page_size,
            "sort": "relevance",
        }

        try:
            response = await client.get(CRATES_ENDPOINT, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            message = (
                f"crates.io API error: {exc.response.status_code} - {exc.response.text}"
            )
            LOGGER.error(message)
            raise RegistryError(message, keyword=keyword) from exc
        except httpx.RequestError as exc:
            LOGGER.error("crates.io request failed: %s", exc)
            raise RegistryError(f"Request failed: {exc}", keyword=keyword) from exc
        except ValueError as exc:
            LOGGER.error("crates.io returned invalid JSON: %s", exc)
            raise RegistryError(
                f"Invalid response from crates.io: {exc}", keyword=keyword
            ) from exc

        raw_crates = data.get("crates", []) if isinstance(data, dict) else []
        return [_raw_to_record(raw) for raw in raw_crates[: self._page_size]]
