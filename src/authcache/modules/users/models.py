"""User database models."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from authcache.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_OAUTH_ID_LENGTH,
    MAX_OAUTH_PROVIDER_LENGTH,
    MAX_USERNAME_LENGTH,
)
from authcache.core.database.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """User record in the directory.

    Users are created on their first external login and pick a username
    afterwards; until then ``username`` is NULL.

    Attributes:
        email: Email address reported by the identity provider
        username: Public handle, unset until registration completes
        oauth_provider: OAuth provider name (google)
        oauth_id: Stable user ID issued by the provider
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("oauth_provider", "oauth_id", name="uq_users_oauth_identity"),
    )

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        index=True,
    )
    username: Mapped[str | None] = mapped_column(
        String(MAX_USERNAME_LENGTH),
        nullable=True,
        unique=True,
    )
    oauth_provider: Mapped[str] = mapped_column(
        String(MAX_OAUTH_PROVIDER_LENGTH),
        nullable=False,
    )
    oauth_id: Mapped[str] = mapped_column(
        String(MAX_OAUTH_ID_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, oauth_provider={self.oauth_provider})>"
