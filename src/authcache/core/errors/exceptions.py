"""Domain exceptions for the application.

Every error raised by the cache and auth layers derives from AppException,
so an outer request handler can map them uniformly by ``status_code`` and
``error_code``.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code a request handler should use
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("User not found", resource="user", resource_id=user_id)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class BadRequestError(AppException):
    """Raised for general client errors."""

    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class ConflictError(AppException):
    """Raised when there's a conflict with existing data."""

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class UnauthorizedError(AppException):
    """Raised when authentication is required but not provided or invalid."""

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ServiceUnavailableError(AppException):
    """Raised when a required service is unavailable."""

    message = "Service temporarily unavailable"
    error_code = "service_unavailable"
    status_code = 503


class BackendUnavailableError(ServiceUnavailableError):
    """Raised when the key-value backend cannot be reached.

    Not retried locally; surfaced to the caller.

    Example:
        raise BackendUnavailableError(details={"operation": "get"})
    """

    message = "Cache backend unavailable"
    error_code = "backend_unavailable"


class UserNotFoundError(NotFoundError):
    """Raised when the user directory has no record for an identifier."""

    message = "User not found"
    error_code = "user_not_found"

    def __init__(self, user_id: str, message: str | None = None) -> None:
        super().__init__(message=message, resource="user", resource_id=user_id)


class MalformedSessionError(BadRequestError):
    """Raised when a session identifier is not a string.

    Callers resolve this to an unauthenticated request rather than a fault.
    """

    message = "Malformed session identifier"
    error_code = "malformed_session"


class CacheDeserializationError(AppException):
    """Raised when a cached payload is not valid JSON or has the wrong shape."""

    message = "Cached value could not be deserialized"
    error_code = "cache_deserialization_error"


class OAuthError(UnauthorizedError):
    """Raised when the external identity provider handshake fails."""

    message = "OAuth authentication failed"
    error_code = "oauth_failed"


class ExternalIdentityConflictError(ConflictError):
    """Raised when an external identity is already bound to a user.

    Happens when two first logins for the same identity race to create it.
    """

    message = "External identity already registered"
    error_code = "external_identity_conflict"
