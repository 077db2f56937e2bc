"""Key-value store backends.

Provides the KeyValueStore protocol consumed by the cache layer and a
Redis implementation over an injected ``redis.asyncio`` client.
"""

from typing import TYPE_CHECKING, Any, Protocol

import redis.asyncio as redis
import structlog
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from authcache.core.errors import BackendUnavailableError


if TYPE_CHECKING:
    from authcache.config import Settings


logger = structlog.get_logger()


class KeyValueStore(Protocol):
    """Minimal async key-value capability set used by the cache."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def expire(self, key: str, seconds: int) -> None: ...


def create_redis_pool(settings: "Settings") -> "ConnectionPool[Any]":
    """Create the process-wide Redis connection pool.

    Args:
        settings: Application settings with the Redis URL

    Returns:
        Connection pool decoding responses to ``str``
    """
    return ConnectionPool.from_url(
        str(settings.redis_url),
        max_connections=settings.redis_max_connections,
        decode_responses=True,
    )


class RedisKeyValueStore:
    """KeyValueStore backed by Redis.

    Connection failures surface as BackendUnavailableError; nothing is
    retried here.
    """

    def __init__(self, client: "redis.Redis[Any]") -> None:
        """Initialize the store.

        Args:
            client: Redis client created with ``decode_responses=True``
        """
        self.client = client

    @classmethod
    def from_pool(cls, pool: "ConnectionPool[Any]") -> "RedisKeyValueStore":
        """Build a store on top of an existing connection pool."""
        return cls(redis.Redis(connection_pool=pool))

    async def get(self, key: str) -> str | None:
        """Get a raw value.

        Args:
            key: Backend key

        Returns:
            Stored value or None if missing or expired
        """
        try:
            return await self.client.get(key)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise _unavailable("get", key, e) from e

    async def set(self, key: str, value: str) -> None:
        """Store a value without expiry.

        Args:
            key: Backend key
            value: Value to store
        """
        try:
            await self.client.set(key, value)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise _unavailable("set", key, e) from e

    async def expire(self, key: str, seconds: int) -> None:
        """Set an expiry on an existing key.

        Args:
            key: Backend key
            seconds: Time to live in seconds
        """
        try:
            await self.client.expire(key, seconds)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise _unavailable("expire", key, e) from e

    async def aclose(self) -> None:
        """Release the client's connection back to the pool."""
        await self.client.aclose()


def _unavailable(operation: str, key: str, error: Exception) -> BackendUnavailableError:
    logger.error(
        "kv_backend_unavailable",
        operation=operation,
        key=key,
        error=str(error),
    )
    return BackendUnavailableError(details={"operation": operation})
