"""Conversion between users and session identifiers.

A session stores nothing but the directory ID as a string; everything
else is reloaded through SessionUserLoader on each request.
"""

import structlog

from authcache.core.auth.loader import SessionUserLoader
from authcache.core.errors import MalformedSessionError, UserNotFoundError
from authcache.modules.users.models import User
from authcache.modules.users.schemas import UserProjection


logger = structlog.get_logger()


def serialize_user(user: User | UserProjection | None) -> str | None:
    """Turn a user into the identifier stored in the session.

    Returns:
        The directory ID as a string, or None if the user has no ID
    """
    if user is None or user.id is None:
        return None
    return str(user.id)


def parse_session_identifier(value: object) -> str:
    """Validate a raw session value.

    Raises:
        MalformedSessionError: If the value is not a string
    """
    if not isinstance(value, str):
        raise MalformedSessionError(details={"identifier_type": type(value).__name__})
    return value


async def deserialize_user(
    value: object,
    loader: SessionUserLoader,
) -> UserProjection | None:
    """Resolve a session value to the current user.

    A malformed identifier or a session pointing at a deleted user both
    yield None, which callers treat as an unauthenticated request. Backend
    and deserialization errors propagate.

    Args:
        value: Raw identifier read from the session
        loader: Loader used to resolve the identifier

    Returns:
        The user projection, or None when there is no valid session
    """
    try:
        user_id = parse_session_identifier(value)
    except MalformedSessionError as e:
        logger.warning("session_malformed", **e.details)
        return None

    try:
        return await loader.load(user_id)
    except UserNotFoundError:
        logger.warning("session_user_missing", user_id=user_id)
        return None
