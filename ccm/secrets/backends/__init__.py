"""Secret store backend implementations."""

from .file import FileSecretStore
from .keyring_store import KeyringStore
from .macos import MacOSKeychainStore

__all__ = ["FileSecretStore", "KeyringStore", "MacOSKeychainStore"]
