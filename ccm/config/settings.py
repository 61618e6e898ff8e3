"""Application configuration and settings using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_KEYCHAIN_SERVICE = "Claude Code-credentials"


def _home_file(name: str):
    return lambda: Path.home() / name


class Settings(BaseSettings):
    """ccm settings with CCM_* environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="CCM_",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    log_level: str = Field(default="WARNING", description="Logging level")
    structured_logging: bool = Field(default=False, description="Render logs as JSON")

    # Files
    config_file: Path = Field(default_factory=_home_file(".ccm_config"), description="Provider config file")
    accounts_file: Path = Field(default_factory=_home_file(".ccm_accounts"), description="Account registry file")
    credentials_file: Path = Field(
        default_factory=_home_file(".ccm_credentials"),
        description="Credential file used by the file secret backend"
    )

    # Platform credential store
    keychain_service: str = Field(
        default=DEFAULT_KEYCHAIN_SERVICE,
        description="Service name of the active credential in the platform store"
    )
    secret_backend: str = Field(default="auto", description="Secret backend: auto, macos, keyring, file")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level setting."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("secret_backend")
    @classmethod
    def validate_secret_backend(cls, v: str) -> str:
        """Validate secret backend setting."""
        allowed = ["auto", "macos", "keyring", "file"]
        if v.lower() not in allowed:
            raise ValueError(f"Secret backend must be one of: {allowed}")
        return v.lower()

    @field_validator("keychain_service")
    @classmethod
    def validate_keychain_service(cls, v: str) -> str:
        return v or DEFAULT_KEYCHAIN_SERVICE

    @property
    def registry_lock_file(self) -> Path:
        """Advisory lock file guarding registry mutations."""
        return self.accounts_file.with_name(self.accounts_file.name + ".lock")


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
