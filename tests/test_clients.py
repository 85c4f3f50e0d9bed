"""Tests for docsrs.clients module."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from docsrs.clients import LazyClient, build_http_client, build_registry_client
from docsrs.config import DocsConfig
from docsrs.errors import InitializeClientError


class TestLazyClient:
    @pytest.mark.asyncio
    async def test_concurrent_first_use_builds_once(self):
        calls = []

        def factory():
            calls.append(1)
            return object()

        lazy = LazyClient(factory, name="test client")
        instances = await asyncio.gather(*(lazy.get() for _ in range(50)))

        assert len(calls) == 1
        assert all(instance is instances[0] for instance in instances)
        assert lazy.initialized

    @pytest.mark.asyncio
    async def test_factory_failure_then_retry(self):
        sentinel = object()
        factory = MagicMock(side_effect=[RuntimeError("no TLS backend"), sentinel])
        lazy = LazyClient(factory)

        with pytest.raises(InitializeClientError, match="no TLS backend"):
            await lazy.get()
        assert not lazy.initialized

        assert await lazy.get() is sentinel
        assert factory.call_count == 2

    @pytest.mark.asyncio
    async def test_aclose_closes_instance(self):
        instance = MagicMock()
        instance.aclose = AsyncMock()
        lazy = LazyClient(lambda: instance)

        await lazy.get()
        await lazy.aclose()

        instance.aclose.assert_awaited_once()
        assert not lazy.initialized

    @pytest.mark.asyncio
    async def test_aclose_without_instance(self):
        factory = MagicMock()
        lazy = LazyClient(factory)
        await lazy.aclose()
        factory.assert_not_called()


class TestBuilders:
    @pytest.mark.asyncio
    async def test_http_client(self):
        config = DocsConfig(user_agent="tester/1.0", timeout=5.0)
        client = build_http_client(config)
        try:
            assert isinstance(client, httpx.AsyncClient)
            assert client.headers["User-Agent"] == "tester/1.0"
            assert client.follow_redirects is True
            assert client.timeout.read == 5.0
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_registry_client(self):
        config = DocsConfig(registry_url="https://registry.example")
        client = build_registry_client(config)
        try:
            assert str(client.base_url).startswith("https://registry.example")
            assert client.headers["Accept"] == "application/json"
        finally:
            await client.aclose()
