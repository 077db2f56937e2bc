"""Database layer - engine construction, base model and mixins."""

from authcache.core.database.base import Base, TimestampMixin, UUIDMixin
from authcache.core.database.session import create_engine, create_session_factory


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_engine",
    "create_session_factory",
]
