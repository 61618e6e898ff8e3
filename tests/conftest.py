"""Global test configuration and fixtures."""

import json
import logging

import pytest
import structlog

from ccm.accounts import AccountRegistry, AccountVault
from ccm.config.settings import Settings
from ccm.errors import StoreUnavailable
from ccm.secrets.base import SecretStore

# Keys the resolver or provider commands read; cleared so the developer's shell cannot leak in.
CONFIG_ENV_KEYS = [
    "DEEPSEEK_API_KEY", "GLM_API_KEY", "KIMI_API_KEY", "LONGCAT_API_KEY",
    "MINIMAX_API_KEY", "ARK_API_KEY", "QWEN_API_KEY", "KAT_API_KEY", "CLAUDE_API_KEY",
    "DEEPSEEK_MODEL", "KIMI_MODEL", "CLAUDE_MODEL", "KAT_ENDPOINT_ID",
    "ANTHROPIC_BASE_URL", "ANTHROPIC_AUTH_TOKEN", "ANTHROPIC_MODEL",
    "ANTHROPIC_SMALL_FAST_MODEL", "EDITOR", "VISUAL",
]
CCM_ENV_KEYS = [
    "CCM_LOG_LEVEL", "CCM_STRUCTURED_LOGGING", "CCM_CONFIG_FILE",
    "CCM_ACCOUNTS_FILE", "CCM_CREDENTIALS_FILE", "CCM_KEYCHAIN_SERVICE", "CCM_SECRET_BACKEND",
]


def make_credential(token: str, subscription: str = "pro", expires_at: int = 1893456000000) -> bytes:
    """Credential blob shaped like the ones Claude Code stores."""
    return json.dumps({
        "claudeAiOauth": {
            "accessToken": token,
            "refreshToken": f"refresh-{token}",
            "expiresAt": expires_at,
            "subscriptionType": subscription,
        }
    }).encode("utf-8")


class InMemorySecretStore(SecretStore):
    """Secret store double keeping blobs in a dict."""

    backend_name = "memory"

    def __init__(self, entries=None, failing=(), **kwargs):
        kwargs.setdefault("account", "tester")
        super().__init__(**kwargs)
        self.entries = dict(entries or {})
        self.failing = set(failing)
        self.calls = []

    def read(self, service):
        self.calls.append(("read", service))
        if service in self.failing:
            raise StoreUnavailable(f"lookup failed for {service}")
        return self.entries.get(service)

    def write(self, service, blob):
        self.calls.append(("write", service))
        self.entries[service] = blob

    def remove(self, service):
        self.calls.append(("remove", service))
        return self.entries.pop(service, None) is not None


@pytest.fixture
def clean_env(monkeypatch):
    """Environment without provider keys or CCM_* settings."""
    for key in CONFIG_ENV_KEYS + CCM_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def test_settings(tmp_path, clean_env):
    """Settings pointing every file at a temporary directory."""
    return Settings(
        config_file=tmp_path / ".ccm_config",
        accounts_file=tmp_path / ".ccm_accounts",
        credentials_file=tmp_path / ".ccm_credentials",
        secret_backend="file",
        log_level="DEBUG",
    )


@pytest.fixture
def memory_store():
    """Empty in-memory secret store."""
    return InMemorySecretStore()


@pytest.fixture
def registry(test_settings):
    """Account registry in the temporary directory."""
    return AccountRegistry(test_settings.accounts_file, test_settings.registry_lock_file)


@pytest.fixture
def vault(memory_store, registry):
    """Account vault over the in-memory store and temporary registry."""
    return AccountVault(memory_store, registry)


@pytest.fixture
def credential():
    """Factory for credential blobs."""
    return make_credential


@pytest.fixture
def store_factory():
    """Factory for in-memory secret stores with preset entries or failing services."""
    return InMemorySecretStore


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to captured streams by setup_logging()."""
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
