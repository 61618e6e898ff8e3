"""macOS Keychain backend driven through the ``security`` command line tool."""

import subprocess

from ...errors import StoreUnavailable
from ..base import SecretStore

# security(1) exit status for errSecItemNotFound
ITEM_NOT_FOUND = 44


class MacOSKeychainStore(SecretStore):
    """Generic-password items in the login keychain."""

    backend_name = "macos"
    text_only = True
    security_bin = "security"

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.security_bin, *args],
                capture_output=True,
                check=False,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise StoreUnavailable(f"Cannot run {self.security_bin}: {e}")

    def _failure(self, action: str, result: subprocess.CompletedProcess) -> StoreUnavailable:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        return StoreUnavailable(f"Keychain {action} failed (exit {result.returncode}): {stderr}")

    def read(self, service: str) -> bytes | None:
        result = self._run("find-generic-password", "-s", service, "-w")

        if result.returncode == ITEM_NOT_FOUND:
            return None
        if result.returncode != 0:
            raise self._failure("read", result)

        blob = result.stdout
        if blob.endswith(b"\n"):
            blob = blob[:-1]
        return blob or None

    def write(self, service: str, blob: bytes) -> None:
        result = self._run(
            "add-generic-password",
            "-a", self.account,
            "-s", service,
            "-w", self._to_text(service, blob),
        )
        if result.returncode != 0:
            raise self._failure("write", result)

    def remove(self, service: str) -> bool:
        result = self._run("delete-generic-password", "-s", service)

        if result.returncode == ITEM_NOT_FOUND:
            return False
        if result.returncode != 0:
            raise self._failure("delete", result)
        return True
