"""
Tests for settings loading.
"""

import pytest
from pathlib import Path

from pydantic import ValidationError

from financeflow.config import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


class TestStorageSettings:
    """Tests for the storage settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FINANCEFLOW_STORAGE_BACKEND", raising=False)
        monkeypatch.delenv("FINANCEFLOW_STORAGE_FILE_PATH", raising=False)
        settings = StorageSettings()
        assert settings.backend == "file"
        assert settings.file_path == Path(".financeflow/storage.json")

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FINANCEFLOW_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("FINANCEFLOW_STORAGE_FILE_PATH", str(tmp_path / "x.json"))
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.file_path == tmp_path / "x.json"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("FINANCEFLOW_STORAGE_BACKEND", "redis")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_directory_path_rejected(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FINANCEFLOW_STORAGE_FILE_PATH", str(tmp_path))
        with pytest.raises(ValidationError):
            StorageSettings()


class TestAppSettings:
    """Tests for the app settings."""

    def test_log_level_follows_debug_mode(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "true")
        assert AppSettings().log_level == "DEBUG"
        monkeypatch.setenv("DEBUG_MODE", "false")
        assert AppSettings().log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CURRENCY_SYMBOL", "€")
        monkeypatch.setenv("RECENT_TRANSACTIONS_LIMIT", "5")
        settings = AppSettings()
        assert settings.currency_symbol == "€"
        assert settings.recent_transactions_limit == 5

    @pytest.mark.parametrize("value", ["0", "25", "six"])
    def test_invalid_trend_months(self, monkeypatch, value):
        monkeypatch.setenv("TREND_MONTHS", value)
        with pytest.raises(ValidationError):
            AppSettings()


class TestRootSettings:
    """Tests for the settings container."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_sub_settings(self):
        settings = Settings()
        assert isinstance(settings.storage, StorageSettings)
        assert isinstance(settings.app, AppSettings)

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("TREND_MONTHS", "99")
        get_settings.cache_clear()
        try:
            status = validate_all_settings()
        finally:
            get_settings.cache_clear()

        assert status["storage"] is True
        assert status["app"] is False
        assert "trend_months" in status["app_error"]
