"""Tests for settings parsing and logging setup."""

import logging

import pytest

from webhook_monitor.core.config import DEFAULT_CORS_ORIGINS, Settings
from webhook_monitor.core.logging import configure_logging


class TestSettings:
    """Test cases for Settings."""

    def test_postgres_scheme_is_rewritten(self):
        settings = Settings(database_url="postgres://user:pass@db:5432/webhook_monitoring")

        assert settings.database_url == "postgresql+psycopg://user:pass@db:5432/webhook_monitoring"

    def test_other_urls_untouched(self):
        assert Settings(database_url="sqlite://").database_url == "sqlite://"

    def test_cors_origins_parsed(self):
        settings = Settings(cors_origins_raw="http://a.com/, http://b.com,,")

        assert settings.cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_default(self):
        assert Settings(cors_origins_raw=" ").cors_origins == DEFAULT_CORS_ORIGINS

    def test_retention_policies_parsed(self):
        settings = Settings(retention_policies_raw="1:30, 2:7")

        assert settings.retention_policies == {1: 30, 2: 7}

    def test_malformed_retention_entries_skipped(self):
        settings = Settings(retention_policies_raw="1:30,bad,3:-1,4,x:5,5:0")

        assert settings.retention_policies == {1: 30, 5: 0}

    def test_no_retention_policies(self):
        assert Settings(retention_policies_raw=None).retention_policies == {}

    def test_retention_policies_from_env(self, monkeypatch):
        monkeypatch.setenv("RETENTION_POLICIES", "9:14")

        assert Settings().retention_policies == {9: 14}


class TestConfigureLogging:
    """Test cases for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_sets_level(self):
        configure_logging("debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty")

        assert logging.getLogger().level == logging.INFO
