"""Backend for the native secret services reachable through ``keyring``.

Covers the freedesktop Secret Service (GNOME Keyring, KWallet) and the
Windows Credential Locker.
"""

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ...errors import StoreUnavailable
from ..base import SecretStore


class KeyringStore(SecretStore):
    """Credential blob stored as the password of (service, account)."""

    backend_name = "keyring"
    text_only = True

    def read(self, service: str) -> bytes | None:
        try:
            value = keyring.get_password(service, self.account)
        except KeyringError as e:
            raise StoreUnavailable(f"Keyring read failed: {e}")
        return value.encode("utf-8") if value else None

    def write(self, service: str, blob: bytes) -> None:
        text = self._to_text(service, blob)
        try:
            keyring.set_password(service, self.account, text)
        except KeyringError as e:
            raise StoreUnavailable(f"Keyring write failed: {e}")

    def remove(self, service: str) -> bool:
        try:
            keyring.delete_password(service, self.account)
        except PasswordDeleteError:
            return False
        except KeyringError as e:
            raise StoreUnavailable(f"Keyring delete failed: {e}")
        return True
