"""Cache module for Redis-backed caching.

Provides:
- KeyValueStore protocol and its Redis implementation
- ReadThroughCache with key namespacing and TTL
- Serialization of user projections
"""

from authcache.core.cache.cache import ReadThroughCache
from authcache.core.cache.serializers import deserialize_projection, serialize_projection
from authcache.core.cache.store import KeyValueStore, RedisKeyValueStore, create_redis_pool


__all__ = [
    "KeyValueStore",
    "ReadThroughCache",
    "RedisKeyValueStore",
    "create_redis_pool",
    "deserialize_projection",
    "serialize_projection",
]
