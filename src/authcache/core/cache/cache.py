"""Namespaced cache over a KeyValueStore.

Every key is prefixed before it reaches the backend so cache entries never
collide with unrelated data sharing the same store.

Note:
    ``set`` with a TTL issues two backend calls (set, then expire). A failure
    between them leaves the value stored without its expiry. The gap is
    accepted: entries are full overwrites of derived data and the next
    successful write restores the TTL.
"""

import json
from typing import Any

from authcache.core.cache.store import KeyValueStore
from authcache.core.constants import CACHE_KEY_PREFIX
from authcache.core.errors import CacheDeserializationError


class ReadThroughCache:
    """Prefix-namespaced cache with optional per-entry expiry."""

    def __init__(self, store: KeyValueStore, prefix: str = CACHE_KEY_PREFIX) -> None:
        """Initialize cache.

        Args:
            store: Backend performing the actual reads and writes
            prefix: Namespace prepended to every key
        """
        self.store = store
        self.prefix = prefix

    def _key(self, key: str) -> str:
        """Generate prefixed key."""
        return f"{self.prefix}{key}"

    async def get(self, key: str) -> str | None:
        """Get a value from cache.

        Args:
            key: Cache key (without namespace)

        Returns:
            Cached value or None if not found or expired
        """
        return await self.store.get(self._key(key))

    async def set(
        self,
        key: str,
        value: str,
        ttl_seconds: int | None = None,
    ) -> None:
        """Set a value in cache.

        Args:
            key: Cache key (without namespace)
            value: Value to cache
            ttl_seconds: Optional TTL in seconds; ignored unless positive
        """
        full_key = self._key(key)
        await self.store.set(full_key, value)
        if ttl_seconds is not None and ttl_seconds > 0:
            await self.store.expire(full_key, ttl_seconds)

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl_seconds: int | None = None,
    ) -> None:
        """Set a JSON value in cache."""
        await self.set(key, json.dumps(value, separators=(",", ":")), ttl_seconds)

    async def get_json(self, key: str) -> dict[str, Any] | None:
        """Get a JSON object from cache.

        Raises:
            CacheDeserializationError: If the stored value is not a JSON object
        """
        data = await self.get(key)
        if data is None:
            return None
        try:
            value = json.loads(data)
        except json.JSONDecodeError as e:
            raise CacheDeserializationError(details={"key": key}) from e
        if not isinstance(value, dict):
            raise CacheDeserializationError(details={"key": key})
        return value
