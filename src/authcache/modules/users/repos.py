"""User directory backed by the database."""

from typing import Protocol
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authcache.core.errors import ExternalIdentityConflictError
from authcache.modules.users.models import User


logger = structlog.get_logger()

GOOGLE_PROVIDER = "google"


class UserDirectory(Protocol):
    """Lookup and creation of directory records."""

    async def find_by_id(self, user_id: str) -> User | None: ...

    async def find_by_external_id(self, external_id: str) -> User | None: ...

    async def create(self, external_id: str, email: str) -> User: ...


class UserRepository:
    """Repository for User database operations.

    Each call runs in its own session from the injected factory, so one
    repository instance can be shared by the whole process.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider: str = GOOGLE_PROVIDER,
    ) -> None:
        self.session_factory = session_factory
        self.provider = provider

    async def find_by_id(self, user_id: str) -> User | None:
        """Get a user by directory ID.

        Args:
            user_id: String form of the user's UUID

        Returns:
            User if found, None otherwise (including non-UUID input)
        """
        try:
            pk = UUID(user_id)
        except ValueError:
            return None

        async with self.session_factory() as session:
            result = await session.execute(select(User).where(User.id == pk))
            return result.scalar_one_or_none()

    async def find_by_external_id(self, external_id: str) -> User | None:
        """Get a user by the ID their identity provider issued.

        Args:
            external_id: Provider-issued subject identifier

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(
            User.oauth_provider == self.provider,
            User.oauth_id == external_id,
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def create(self, external_id: str, email: str) -> User:
        """Create a user bound to an external identity.

        The new user has no username until registration completes.

        Args:
            external_id: Provider-issued subject identifier
            email: Email reported by the provider

        Returns:
            The created user with ID populated

        Raises:
            ExternalIdentityConflictError: If the identity is already bound
        """
        user = User(
            email=email,
            oauth_provider=self.provider,
            oauth_id=external_id,
        )
        async with self.session_factory() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise ExternalIdentityConflictError(
                    details={"provider": self.provider, "external_id": external_id},
                ) from e
            await session.refresh(user)

        logger.info(
            "user_created",
            user_id=str(user.id),
            provider=self.provider,
        )
        return user
