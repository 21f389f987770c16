"""Fixtures — in-memory Redis, cache and conversation store, stub fetchers."""

from __future__ import annotations

import pytest
import pytest_asyncio
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis

from linkchat.cache.conversations import ConversationStore
from linkchat.cache.redis import ContentCache
from linkchat.scrape.http_fetcher import FetchResult


class StubFetcher:
    """Fetcher returning canned HTML per URL and recording every call."""

    def __init__(self, pages: dict[str, str | None] | None = None) -> None:
        self.pages = pages or {}
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        html = self.pages.get(url)
        if html is None:
            return FetchResult(url=url, error="not found")
        return FetchResult(url=url, html=html, status_code=200)


@pytest.fixture
def fake_server() -> FakeServer:
    return FakeServer()


@pytest_asyncio.fixture
async def redis_client(fake_server):
    client = FakeRedis(server=fake_server, decode_responses=True)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def content_cache(redis_client):
    """ContentCache backed by an in-memory FakeRedis instance."""
    return ContentCache(redis_client)


@pytest_asyncio.fixture
async def conversation_store(redis_client):
    return ConversationStore(redis_client)


@pytest.fixture
def make_fetcher():
    """Factory for :class:`StubFetcher` instances."""
    return StubFetcher
