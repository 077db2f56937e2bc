"""Unit tests for settings."""

import pytest

from authcache.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_async_database_url(self):
        """Verify the asyncpg driver is injected."""
        settings = Settings(database_url="postgresql://u:p@db:5432/app")

        assert settings.async_database_url.startswith("postgresql+asyncpg://")

    def test_is_production(self):
        """Verify production detection."""
        assert Settings(environment="production").is_production is True
        assert Settings(environment="development").is_production is False

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Verify values come from environment variables."""
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "from-env")
        monkeypatch.setenv("REDIS_MAX_CONNECTIONS", "7")

        settings = Settings()

        assert settings.google_client_id == "from-env"
        assert settings.redis_max_connections == 7
