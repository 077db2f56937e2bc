"""Resolution of external identities to directory records.

Called once the identity provider has authenticated a user. The outcome is
an explicit result value rather than a raised error, so login handlers can
branch on it without their own exception plumbing.
"""

from dataclasses import dataclass

import structlog

from authcache.core.errors import AppException, ExternalIdentityConflictError
from authcache.modules.users.models import User
from authcache.modules.users.repos import UserDirectory


logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class AuthSuccess:
    """Login succeeded with an existing or newly created user."""

    user: User
    created: bool = False


@dataclass(frozen=True, slots=True)
class AuthFailure:
    """Login failed; ``error`` says why."""

    error: AppException


AuthResult = AuthSuccess | AuthFailure


async def authenticate_external_identity(
    directory: UserDirectory,
    external_id: str,
    email: str,
) -> AuthResult:
    """Find the user bound to an external identity, creating one if needed.

    Args:
        directory: User directory to query and write to
        external_id: Stable ID issued by the identity provider
        email: Email reported by the identity provider

    Returns:
        AuthSuccess with the directory record, or AuthFailure on error
    """
    try:
        existing = await directory.find_by_external_id(external_id)
        if existing is not None:
            logger.info("external_identity_matched", user_id=str(existing.id))
            return AuthSuccess(user=existing)

        try:
            user = await directory.create(external_id, email)
        except ExternalIdentityConflictError:
            # A concurrent first login created the record first
            winner = await directory.find_by_external_id(external_id)
            if winner is None:
                raise
            logger.info("external_identity_matched_after_conflict", user_id=str(winner.id))
            return AuthSuccess(user=winner)
    except AppException as e:
        logger.warning("external_identity_failed", error_code=e.error_code)
        return AuthFailure(error=e)
    except Exception as e:
        logger.exception("external_identity_failed", error_type=type(e).__name__)
        return AuthFailure(error=AppException(details={"error_type": type(e).__name__}))

    logger.info("external_identity_created", user_id=str(user.id))
    return AuthSuccess(user=user, created=True)
