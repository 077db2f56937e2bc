"""Error types shared by the cache and auth layers."""

from authcache.core.errors.exceptions import (
    AppException,
    BackendUnavailableError,
    BadRequestError,
    CacheDeserializationError,
    ConflictError,
    ExternalIdentityConflictError,
    MalformedSessionError,
    NotFoundError,
    OAuthError,
    ServiceUnavailableError,
    UnauthorizedError,
    UserNotFoundError,
)


__all__ = [
    "AppException",
    "BackendUnavailableError",
    "BadRequestError",
    "CacheDeserializationError",
    "ConflictError",
    "ExternalIdentityConflictError",
    "MalformedSessionError",
    "NotFoundError",
    "OAuthError",
    "ServiceUnavailableError",
    "UnauthorizedError",
    "UserNotFoundError",
]
