"""Serialization of user projections for caching.

Wire format is a compact JSON object with exactly ``id`` and, when present,
``username``. An absent username is omitted; an empty string is kept, so the
two stay distinguishable after a round trip.
"""

from pydantic import ValidationError

from authcache.core.errors import CacheDeserializationError
from authcache.modules.users.schemas import UserProjection


def serialize_projection(projection: UserProjection) -> str:
    """Serialize a projection for caching.

    Args:
        projection: The projection to store

    Returns:
        JSON string such as ``{"id":"7","username":"alice"}``
    """
    return projection.model_dump_json(exclude_none=True)


def deserialize_projection(data: str) -> UserProjection:
    """Deserialize a cached projection.

    Args:
        data: JSON string from cache

    Returns:
        The reconstructed projection

    Raises:
        CacheDeserializationError: If data is not JSON or has the wrong shape
    """
    try:
        return UserProjection.model_validate_json(data)
    except ValidationError as e:
        raise CacheDeserializationError(
            details={"errors": e.error_count()},
        ) from e
