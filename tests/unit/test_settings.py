"""Tests for ABHASettings."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from abha_sdk.core.config.settings import ABHASettings, get_settings
from abha_sdk.core.environment import Environment


class TestABHASettings:
    """Tests for settings loading and validation."""

    def test_defaults(self):
        settings = ABHASettings()

        assert settings.environment == Environment.SANDBOX
        assert settings.timeout == 30.0
        assert settings.token_refresh_buffer_seconds == 60
        assert settings.log_level == "INFO"
        assert settings.debug is False
        assert settings.has_credentials() is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("ABHA_CLIENT_ID", "client")
        monkeypatch.setenv("ABHA_CLIENT_SECRET", "secret")
        monkeypatch.setenv("ABHA_ENVIRONMENT", "PRODUCTION")
        monkeypatch.setenv("ABHA_TIMEOUT", "12.5")
        monkeypatch.setenv("ABHA_LOG_LEVEL", "debug")

        settings = ABHASettings()

        assert settings.client_id == "client"
        assert settings.client_secret.get_secret_value() == "secret"
        assert settings.environment == Environment.PRODUCTION
        assert settings.timeout == 12.5
        assert settings.log_level == "DEBUG"
        assert settings.has_credentials() is True

    def test_secret_not_in_repr(self, monkeypatch):
        monkeypatch.setenv("ABHA_CLIENT_SECRET", "super-secret")
        assert "super-secret" not in repr(ABHASettings())

    @pytest.mark.parametrize(
        "name, value",
        [
            ("ABHA_ENVIRONMENT", "staging"),
            ("ABHA_LOG_LEVEL", "VERBOSE"),
            ("ABHA_TIMEOUT", "0"),
            ("ABHA_TOKEN_REFRESH_BUFFER_SECONDS", "-1"),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(PydanticValidationError):
            ABHASettings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
