"""Unit tests for settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ccm.config.settings import DEFAULT_KEYCHAIN_SERVICE, Settings


@pytest.mark.unit
class TestSettingsUnit:
    """Unit tests for settings configuration."""

    def test_default_settings(self, clean_env):
        """Test default settings values."""
        settings = Settings()

        assert settings.log_level == "WARNING"
        assert settings.structured_logging is False
        assert settings.secret_backend == "auto"
        assert settings.keychain_service == DEFAULT_KEYCHAIN_SERVICE

    def test_default_files_live_in_home(self, clean_env):
        """Test default file locations."""
        settings = Settings()

        assert settings.config_file == Path.home() / ".ccm_config"
        assert settings.accounts_file == Path.home() / ".ccm_accounts"
        assert settings.credentials_file == Path.home() / ".ccm_credentials"

    def test_environment_override(self, clean_env, tmp_path):
        """Test CCM_* environment variables override defaults."""
        clean_env.setenv("CCM_KEYCHAIN_SERVICE", "Custom Service")
        clean_env.setenv("CCM_CONFIG_FILE", str(tmp_path / "cfg"))
        clean_env.setenv("CCM_LOG_LEVEL", "debug")
        clean_env.setenv("CCM_SECRET_BACKEND", "FILE")

        settings = Settings()

        assert settings.keychain_service == "Custom Service"
        assert settings.config_file == tmp_path / "cfg"
        assert settings.log_level == "DEBUG"
        assert settings.secret_backend == "file"

    def test_empty_keychain_service_falls_back(self, clean_env):
        """Test an empty service name keeps the default."""
        clean_env.setenv("CCM_KEYCHAIN_SERVICE", "")

        assert Settings().keychain_service == DEFAULT_KEYCHAIN_SERVICE

    def test_log_level_validation(self, clean_env):
        """Test invalid log level raises error."""
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_secret_backend_validation(self, clean_env):
        """Test invalid secret backend raises error."""
        with pytest.raises(ValidationError):
            Settings(secret_backend="vault")

    def test_registry_lock_file(self, tmp_path, clean_env):
        """Test the lock file sits beside the registry."""
        settings = Settings(accounts_file=tmp_path / ".ccm_accounts")

        assert settings.registry_lock_file == tmp_path / ".ccm_accounts.lock"
