"""Tests for shared/config.py."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Gatehouse API"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.jwt_secret == ""
        assert settings.jwt_issuer == "gatehouse"
        assert settings.jwt_audience == "gatehouse-clients"
        assert settings.access_token_ttl_minutes == 15
        assert settings.refresh_token_ttl_days == 7
        assert settings.login_max_failed_attempts == 5
        assert settings.login_window_minutes == 15
        assert settings.password_reset_ttl_minutes == 60
        assert settings.default_role == "User"
        assert settings.storage_backend == "memory"

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_token_settings_from_env(self):
        """Token lifetimes and claims should be configurable."""
        with patch.dict(os.environ, {
            "JWT_SECRET": "another-secret",
            "JWT_ISSUER": "issuer-x",
            "JWT_AUDIENCE": "aud-x",
            "ACCESS_TOKEN_TTL_MINUTES": "5",
            "REFRESH_TOKEN_TTL_DAYS": "30",
        }):
            settings = Settings()
            assert settings.jwt_secret == "another-secret"
            assert settings.jwt_issuer == "issuer-x"
            assert settings.jwt_audience == "aud-x"
            assert settings.access_token_ttl_minutes == 5
            assert settings.refresh_token_ttl_days == 30

    def test_env_is_case_insensitive(self):
        """Lowercase variable names should be accepted."""
        with patch.dict(os.environ, {"login_max_failed_attempts": "3"}):
            settings = Settings()
            assert settings.login_max_failed_attempts == 3

    def test_rejects_unknown_storage_backend(self):
        """Only the memory and supabase backends exist."""
        with patch.dict(os.environ, {"STORAGE_BACKEND": "redis"}):
            with pytest.raises(ValidationError):
                Settings()


class TestGetSettings:
    def test_returns_cached_instance(self):
        """get_settings should return the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self):
        """Clearing the cache should pick up environment changes."""
        first = get_settings()
        with patch.dict(os.environ, {"LOGIN_WINDOW_MINUTES": "30"}):
            get_settings.cache_clear()
            second = get_settings()
        assert first is not second
        assert second.login_window_minutes == 30
