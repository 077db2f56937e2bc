"""Unit tests for external identity resolution."""

from unittest.mock import AsyncMock

import pytest

from authcache.core.auth.identity import (
    AuthFailure,
    AuthSuccess,
    authenticate_external_identity,
)
from authcache.core.errors import (
    AppException,
    ExternalIdentityConflictError,
    ServiceUnavailableError,
)
from tests.factories import make_user


class TestAuthenticateExternalIdentity:
    """Tests for authenticate_external_identity."""

    @pytest.mark.asyncio
    async def test_existing_user_is_returned(self, directory: AsyncMock):
        """Verify a known external ID returns the stored user."""
        user = make_user(oauth_id="google-1")
        directory.find_by_external_id.return_value = user

        result = await authenticate_external_identity(directory, "google-1", "a@example.com")

        assert result == AuthSuccess(user=user, created=False)
        directory.find_by_external_id.assert_awaited_once_with("google-1")
        directory.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_user_is_created(self, directory: AsyncMock):
        """Verify an unknown external ID creates a user."""
        created = make_user(oauth_id="google-2", email="b@example.com")
        directory.create.return_value = created

        result = await authenticate_external_identity(directory, "google-2", "b@example.com")

        assert isinstance(result, AuthSuccess)
        assert result.user is created
        assert result.created is True
        directory.create.assert_awaited_once_with("google-2", "b@example.com")

    @pytest.mark.asyncio
    async def test_app_error_becomes_failure(self, directory: AsyncMock):
        """Verify domain errors are returned as AuthFailure."""
        error = ServiceUnavailableError("Database down")
        directory.find_by_external_id.side_effect = error

        result = await authenticate_external_identity(directory, "google-3", "c@example.com")

        assert result == AuthFailure(error=error)

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_failure(self, directory: AsyncMock):
        """Verify unexpected directory errors are wrapped."""
        directory.create.side_effect = RuntimeError("boom")

        result = await authenticate_external_identity(directory, "google-4", "d@example.com")

        assert isinstance(result, AuthFailure)
        assert type(result.error) is AppException
        assert result.error.details == {"error_type": "RuntimeError"}

    @pytest.mark.asyncio
    async def test_concurrent_create_returns_existing_user(self, directory: AsyncMock):
        """Verify losing a creation race resolves to the winner's record."""
        winner = make_user(oauth_id="google-5")
        directory.find_by_external_id.side_effect = [None, winner]
        directory.create.side_effect = ExternalIdentityConflictError()

        result = await authenticate_external_identity(directory, "google-5", "e@example.com")

        assert result == AuthSuccess(user=winner, created=False)
        assert directory.find_by_external_id.await_count == 2

    @pytest.mark.asyncio
    async def test_conflict_without_record_is_failure(self, directory: AsyncMock):
        """Verify a conflict that cannot be resolved is reported as a 409."""
        error = ExternalIdentityConflictError()
        directory.create.side_effect = error

        result = await authenticate_external_identity(directory, "google-6", "f@example.com")

        assert result == AuthFailure(error=error)
        assert result.error.status_code == 409
