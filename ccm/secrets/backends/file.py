"""File-based fallback for systems without a native secret service.

Blobs are base64 encoded in an owner-only JSON file. This is encoding, not
encryption.
"""

import base64
import binascii
import json
from pathlib import Path

from ...errors import StoreUnavailable
from ...utils.files import atomic_write_text
from ..base import SecretStore


class FileSecretStore(SecretStore):
    """Service name to blob mapping kept in a local JSON file."""

    backend_name = "file"

    def __init__(self, path: Path, **kwargs):
        super().__init__(**kwargs)
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise StoreUnavailable(f"Cannot read credential file {self.path}: {e}")

        if not isinstance(data, dict):
            raise StoreUnavailable(f"Credential file {self.path} is not a JSON object")
        return data

    def _save(self, data: dict[str, str]) -> None:
        try:
            atomic_write_text(self.path, json.dumps(data, indent=2) + "\n")
        except OSError as e:
            raise StoreUnavailable(f"Cannot write credential file {self.path}: {e}")

    def read(self, service: str) -> bytes | None:
        encoded = self._load().get(service)
        if not encoded:
            return None
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise StoreUnavailable(f"Credential for {service} is not valid base64: {e}")

    def write(self, service: str, blob: bytes) -> None:
        data = self._load()
        data[service] = base64.b64encode(blob).decode("ascii")
        self._save(data)

    def remove(self, service: str) -> bool:
        data = self._load()
        if service not in data:
            return False
        del data[service]
        self._save(data)
        return True
