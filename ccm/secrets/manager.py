"""Secret store selection for the running platform."""

import shutil
import sys

import keyring
import structlog
from keyring.backends import fail

from ..config.settings import Settings, get_settings
from .backends.file import FileSecretStore
from .backends.keyring_store import KeyringStore
from .backends.macos import MacOSKeychainStore
from .base import SecretStore

logger = structlog.get_logger("secrets")


def _keyring_usable() -> bool:
    """Check whether keyring found a real backend rather than the fail stub."""
    try:
        backend = keyring.get_keyring()
    except Exception as e:
        logger.debug("Keyring backend discovery failed", error=str(e))
        return False
    return not isinstance(backend, fail.Keyring)


def detect_backend() -> str:
    """Pick the native backend for this platform."""
    if sys.platform == "darwin" and shutil.which(MacOSKeychainStore.security_bin):
        return "macos"
    if _keyring_usable():
        return "keyring"
    return "file"


def create_secret_store(settings: Settings | None = None) -> SecretStore:
    """Create the secret store configured by ``settings.secret_backend``."""
    settings = settings or get_settings()
    backend = settings.secret_backend
    if backend == "auto":
        backend = detect_backend()

    if backend == "macos":
        store = MacOSKeychainStore(service_name=settings.keychain_service)
    elif backend == "keyring":
        store = KeyringStore(service_name=settings.keychain_service)
    else:
        if settings.secret_backend == "auto":
            logger.warning(
                "No native secret service found, using file fallback",
                credentials_file=str(settings.credentials_file),
            )
        store = FileSecretStore(settings.credentials_file, service_name=settings.keychain_service)

    logger.debug("Secret store selected", backend=store.backend_name, service=store.service_name)
    return store
