"""Test factories."""

from tests.factories.user import UserProjectionFactory, make_user


__all__ = [
    "UserProjectionFactory",
    "make_user",
]
