"""
Unit tests for configuration and logging helpers.
"""

from pathlib import Path

import pytest

from shared.config import DatabaseSettings, ImportSettings, LogLevel, Settings
from shared.logging.logger import _censor_secrets


class TestDatabaseSettings:
    """Tests for DatabaseSettings."""

    def test_default_is_file_backed_sqlite(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default database is a local SQLite file."""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        config = DatabaseSettings()

        assert config.is_sqlite
        assert config.sqlite_path == Path("./database/regulations.db")

    def test_in_memory_has_no_path(self) -> None:
        config = DatabaseSettings(url="sqlite+aiosqlite:///:memory:")

        assert config.is_sqlite
        assert config.sqlite_path is None

    def test_postgres(self) -> None:
        config = DatabaseSettings(url="postgresql+asyncpg://app:pw@db/regulations")

        assert not config.is_sqlite
        assert config.sqlite_path is None


class TestImportSettings:
    """Tests for ImportSettings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("IMPORT_USE_LIVE_SOURCE", raising=False)
        config = ImportSettings()

        assert config.use_live_source is True
        assert config.max_parts_per_title == 3
        assert (config.title_delay_seconds, config.part_delay_seconds) == (0.2, 0.3)
        assert len(config.probe_urls_list) == 3

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values load from IMPORT_ prefixed variables."""
        monkeypatch.setenv("IMPORT_MAX_PARTS_PER_TITLE", "5")
        monkeypatch.setenv("IMPORT_PROBE_URLS", " https://a.test , ,https://b.test")

        config = ImportSettings()

        assert config.max_parts_per_title == 5
        assert config.probe_urls_list == ["https://a.test", "https://b.test"]


class TestSettings:
    """Tests for the top-level Settings."""

    def test_log_level_is_uppercased(self) -> None:
        assert Settings(log_level="debug").log_level == LogLevel.DEBUG

    def test_default_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PORT", raising=False)
        assert Settings().port == 3001

    def test_testing_environment(self) -> None:
        """Test the suite runs with ENVIRONMENT=testing."""
        settings = Settings()

        assert settings.is_testing
        assert not settings.is_production


class TestCensorSecrets:
    """Tests for the secret-censoring log processor."""

    def test_sensitive_keys_redacted(self) -> None:
        event = _censor_secrets(None, "info", {"event": "x", "api_key": "abc", "nested": {"password": "p"}})  # type: ignore[arg-type]

        assert event["api_key"] == "***REDACTED***"
        assert event["nested"]["password"] == "***REDACTED***"
        assert event["event"] == "x"

    def test_url_credentials_masked(self) -> None:
        event = _censor_secrets(
            None,  # type: ignore[arg-type]
            "info",
            {"database_url": "postgresql+asyncpg://app:pw@db:5432/regulations"},
        )

        assert event["database_url"] == "postgresql+asyncpg://***@db:5432/regulations"

    def test_plain_url_untouched(self) -> None:
        event = _censor_secrets(None, "info", {"url": "https://api.federalregister.gov/v1"})  # type: ignore[arg-type]

        assert event["url"] == "https://api.federalregister.gov/v1"
