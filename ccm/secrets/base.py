"""Base secret store interface and alias handling."""

import getpass
from abc import ABC, abstractmethod
from collections.abc import Iterable

import structlog

from ..config.settings import DEFAULT_KEYCHAIN_SERVICE
from ..errors import NotFound, StoreUnavailable

# Service names older Claude Code releases stored credentials under, tried in order.
LEGACY_SERVICE_ALIASES = (
    "Claude Code - credentials",
    "Claude Code",
    "claude",
    "claude.ai",
)


class SecretStore(ABC):
    """Abstract platform credential store holding one opaque blob per service name."""

    backend_name = "base"
    # Backends whose platform API only takes strings
    text_only = False

    def __init__(
        self,
        service_name: str = DEFAULT_KEYCHAIN_SERVICE,
        aliases: Iterable[str] = LEGACY_SERVICE_ALIASES,
        account: str | None = None,
    ):
        """Initialize the store with its canonical service name and read aliases."""
        self.service_name = service_name
        self.aliases = list(dict.fromkeys([service_name, *aliases]))
        self.account = account or getpass.getuser()
        self.logger = structlog.get_logger(f"secrets.{self.backend_name}")

    @abstractmethod
    def read(self, service: str) -> bytes | None:
        """Return the blob stored under ``service``, or None when there is no entry.

        Raises:
            StoreUnavailable: the platform call itself failed.
        """
        pass

    @abstractmethod
    def write(self, service: str, blob: bytes) -> None:
        """Add an entry under ``service``."""
        pass

    @abstractmethod
    def remove(self, service: str) -> bool:
        """Remove the entry under ``service``; False when there was none."""
        pass

    def _to_text(self, service: str, blob: bytes) -> str:
        """Decode a blob for a string-only platform API.

        Raises:
            StoreUnavailable: the blob is not UTF-8 text.
        """
        try:
            return blob.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StoreUnavailable(
                f"Credential for {service} is not UTF-8 text and cannot be stored by the {self.backend_name} backend: {e}"
            ) from None

    def get(self) -> tuple[bytes, str]:
        """Return the active credential blob and the alias it was found under.

        Later writes are pinned to the matching alias.

        Raises:
            NotFound: no alias holds an entry.
            StoreUnavailable: no entry was found and at least one lookup failed.
        """
        failure: StoreUnavailable | None = None

        for alias in self.aliases:
            try:
                blob = self.read(alias)
            except StoreUnavailable as e:
                self.logger.debug("Credential lookup failed", service=alias, error=str(e))
                failure = failure or e
                continue

            if blob:
                if alias != self.service_name:
                    self.logger.info("Pinned credential service alias", service=alias)
                self.service_name = alias
                return blob, alias

        if failure is not None:
            raise failure
        raise NotFound(f"No credentials found under service names: {', '.join(self.aliases)}")

    def set(self, blob: bytes) -> None:
        """Replace the active credential: delete, then add.

        Not atomic: a crash between the two steps leaves the store empty.
        """
        if self.text_only:
            self._to_text(self.service_name, blob)
        self.remove(self.service_name)
        self.write(self.service_name, blob)
        self.logger.info("Credential written", service=self.service_name)

    def delete(self) -> bool:
        """Remove the active credential under the current service name."""
        return self.remove(self.service_name)
