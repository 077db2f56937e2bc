"""Session user loading with a read-through cache.

On a miss the directory is consulted and the projection is written back,
but only for registered users: an account without a username is never
cached, so the projection picks up the username as soon as registration
completes.
"""

import structlog

from authcache.core.cache.cache import ReadThroughCache
from authcache.core.cache.serializers import deserialize_projection, serialize_projection
from authcache.core.constants import USER_CACHE_TTL_SECONDS, USER_KEY_PREFIX
from authcache.core.errors import UserNotFoundError
from authcache.modules.users.models import User
from authcache.modules.users.repos import UserDirectory
from authcache.modules.users.schemas import UserProjection


logger = structlog.get_logger()


def project_user(user: User) -> UserProjection:
    """Reduce a directory record to its public projection."""
    return UserProjection(id=str(user.id), username=user.username)


def user_cache_key(user_id: str) -> str:
    """Cache key for a user, before the cache namespace is applied."""
    return f"{USER_KEY_PREFIX}{user_id}"


class SessionUserLoader:
    """Resolve session identifiers to user projections."""

    def __init__(
        self,
        cache: ReadThroughCache,
        directory: UserDirectory,
        ttl_seconds: int = USER_CACHE_TTL_SECONDS,
    ) -> None:
        self.cache = cache
        self.directory = directory
        self.ttl_seconds = ttl_seconds

    async def load(self, user_id: object) -> UserProjection | None:
        """Load a user from the cache, falling back to the directory.

        Args:
            user_id: Session identifier; anything but a ``str`` is rejected

        Returns:
            The user projection, or None for a non-string identifier

        Raises:
            UserNotFoundError: If the directory has no such user
            CacheDeserializationError: If the cached payload is corrupt
            BackendUnavailableError: If the cache backend is unreachable
        """
        if not isinstance(user_id, str):
            logger.warning("session_malformed", identifier_type=type(user_id).__name__)
            return None

        key = user_cache_key(user_id)
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug("user_cache_hit", user_id=user_id)
            return deserialize_projection(cached)

        logger.debug("user_cache_miss", user_id=user_id)
        user = await self.directory.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        projection = project_user(user)
        if projection.is_registered:
            await self.cache.set(key, serialize_projection(projection), self.ttl_seconds)
            logger.debug("user_cached", user_id=user_id, ttl_seconds=self.ttl_seconds)

        return projection
