"""Unit tests for the Redis key-value store."""

from unittest.mock import AsyncMock

import fakeredis.aioredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from authcache.core.cache.store import RedisKeyValueStore
from authcache.core.errors import BackendUnavailableError


class TestRedisKeyValueStore:
    """Tests for get/set/expire against an in-memory Redis."""

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, store: RedisKeyValueStore):
        """Verify None is returned for a key that was never set."""
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, store: RedisKeyValueStore):
        """Verify a stored value is read back as str."""
        await store.set("k", "v")

        assert await store.get("k") == "v"

    @pytest.mark.asyncio
    async def test_set_has_no_expiry(
        self, store: RedisKeyValueStore, fake_redis: fakeredis.aioredis.FakeRedis
    ):
        """Verify plain set leaves the key persistent."""
        await store.set("k", "v")

        assert await fake_redis.ttl("k") == -1

    @pytest.mark.asyncio
    async def test_expire_sets_ttl(
        self, store: RedisKeyValueStore, fake_redis: fakeredis.aioredis.FakeRedis
    ):
        """Verify expire applies a TTL to an existing key."""
        await store.set("k", "v")
        await store.expire("k", 300)

        ttl = await fake_redis.ttl("k")
        assert 0 < ttl <= 300


class TestBackendUnavailable:
    """Tests for translation of connection failures."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["get", "set", "expire"])
    async def test_connection_error_raises_backend_unavailable(self, operation: str):
        """Verify connection failures surface as BackendUnavailableError."""
        client = AsyncMock()
        getattr(client, operation).side_effect = RedisConnectionError("down")
        store = RedisKeyValueStore(client)
        args = {"get": ("k",), "set": ("k", "v"), "expire": ("k", 10)}[operation]

        with pytest.raises(BackendUnavailableError) as exc_info:
            await getattr(store, operation)(*args)

        assert exc_info.value.error_code == "backend_unavailable"
        assert exc_info.value.status_code == 503
        assert exc_info.value.details == {"operation": operation}
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    @pytest.mark.asyncio
    async def test_timeout_raises_backend_unavailable(self):
        """Verify timeouts are treated like connection loss."""
        client = AsyncMock()
        client.get.side_effect = RedisTimeoutError("slow")
        store = RedisKeyValueStore(client)

        with pytest.raises(BackendUnavailableError):
            await store.get("k")

    @pytest.mark.asyncio
    async def test_failure_is_not_retried(self):
        """Verify the store calls the backend exactly once on failure."""
        client = AsyncMock()
        client.set.side_effect = RedisConnectionError("down")
        store = RedisKeyValueStore(client)

        with pytest.raises(BackendUnavailableError):
            await store.set("k", "v")

        client.set.assert_awaited_once_with("k", "v")
