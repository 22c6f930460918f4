"""
Test settings loading and validation.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from app.core.config import Settings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestSettingsValidation:
    """Test environment and log level validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:")

        assert settings.app_name == "Waste Calculator"
        assert settings.default_page_size == 20
        assert settings.access_token_expire_minutes == 60

    def test_environment_is_case_insensitive(self):
        settings = Settings(environment=" Staging ")
        assert settings.environment == "staging"

    def test_unknown_environment_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="qa")

        assert "environment must be one of" in str(exc_info.value)

    def test_log_level_is_normalised(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="chatty")

        assert "not a valid logging level" in str(exc_info.value)

    def test_production_requires_explicit_secret(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="production", secret_key="change-me-in-production")

        assert "secret_key must be set explicitly" in str(exc_info.value)

    def test_production_with_secret(self):
        settings = Settings(environment="production", secret_key="a-real-production-secret")
        assert settings.environment == "production"

    def test_short_secret_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(secret_key="short")


class TestSettingsCaching:
    """Test settings caching functionality."""

    def test_get_settings_caching(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self):
        """Test that clear_settings_cache clears the cache."""
        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    @patch.dict(os.environ, {"DEFAULT_PAGE_SIZE": "50", "LOG_LEVEL": "warning"})
    def test_environment_variables(self):
        """Test that environment variables are properly loaded."""
        settings = get_settings()

        assert settings.default_page_size == 50
        assert settings.log_level == "WARNING"
