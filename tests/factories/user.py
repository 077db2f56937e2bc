"""User factories for tests."""

from typing import Any
from uuid import uuid4

from polyfactory import Use
from polyfactory.factories.pydantic_factory import ModelFactory

from authcache.modules.users.models import User
from authcache.modules.users.schemas import UserProjection


class UserProjectionFactory(ModelFactory[UserProjection]):
    """Factory for registered user projections."""

    __model__ = UserProjection

    id = Use(lambda: str(uuid4()))
    username = Use(lambda: f"user_{uuid4().hex[:8]}")


def make_user(**overrides: Any) -> User:
    """Build an unsaved User with sensible defaults."""
    values: dict[str, Any] = {
        "id": uuid4(),
        "email": f"user-{uuid4().hex[:8]}@example.com",
        "username": None,
        "oauth_provider": "google",
        "oauth_id": f"google-{uuid4().hex[:12]}",
    }
    values.update(overrides)
    return User(**values)
