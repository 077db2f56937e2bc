"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import fakeredis
import fakeredis.aioredis
import pytest

from authcache.core.cache.cache import ReadThroughCache
from authcache.core.cache.store import RedisKeyValueStore


@pytest.fixture
async def fake_redis() -> AsyncGenerator[fakeredis.aioredis.FakeRedis, None]:
    """In-memory Redis with its own server, so tests never share keys."""
    client = fakeredis.aioredis.FakeRedis(
        server=fakeredis.FakeServer(),
        decode_responses=True,
    )
    yield client
    await client.aclose()


@pytest.fixture
def store(fake_redis: fakeredis.aioredis.FakeRedis) -> RedisKeyValueStore:
    """Redis store over the fake backend."""
    return RedisKeyValueStore(fake_redis)


@pytest.fixture
def cache(store: RedisKeyValueStore) -> ReadThroughCache:
    """Cache with the default namespace over the fake backend."""
    return ReadThroughCache(store)


@pytest.fixture
def directory() -> AsyncMock:
    """User directory test double with no records."""
    mock = AsyncMock()
    mock.find_by_id.return_value = None
    mock.find_by_external_id.return_value = None
    return mock
