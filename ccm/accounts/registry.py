"""Local account registry: ordered account name to encoded blob mapping.

File format (owner-only, one entry per line)::

    {
      "work": "eyJjbGF1ZGVBaU9hdXRoIjp7...",
      "personal": "eyJjbGF1ZGVBaU9hdXRoIjp7..."
    }

The format is a restricted grammar, not JSON: names follow the account name
grammar and values are base64, so neither can contain a quote, a comma or a
brace and no escaping layer is needed. The reader tolerates stray or missing
separators; the writer always emits the canonical layout above, so a
remove never leaves a dangling separator behind.

Every mutation is a read-modify-write under an advisory lock, written to a
temporary file that then replaces the registry.
"""

import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog

from ..errors import AlreadyExists, CorruptRegistry, InvalidName, NotFound
from ..utils.files import atomic_write_text, locked
from .models import Account, validate_account_name

logger = structlog.get_logger("accounts.registry")

_BLOB_RE = re.compile(r"[A-Za-z0-9+/=]*")
_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<open>\{)
    | (?P<close>\})
    | (?P<sep>,)
    | "(?P<name>[^"\\\n]*)"[ \t]*:[ \t]*"(?P<blob>[^"\\\n]*)"
    """,
    re.VERBOSE,
)


def _line_of(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


def parse_registry(text: str) -> dict[str, str]:
    """Parse registry text into an ordered name to encoded blob mapping.

    Empty text is an empty registry. When a name appears twice the first
    entry wins.

    Raises:
        CorruptRegistry: content outside the registry grammar.
    """
    entries: dict[str, str] = {}
    if not text.strip():
        return entries

    opened = closed = False
    pos = 0

    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise CorruptRegistry(f"Unexpected content on line {_line_of(text, pos)}")

        if match.group("ws") is None:
            line = _line_of(text, pos)

            if match.group("open") is not None:
                if opened:
                    raise CorruptRegistry(f"Unexpected '{{' on line {line}")
                opened = True
            elif not opened or closed:
                raise CorruptRegistry(f"Content outside the registry braces on line {line}")
            elif match.group("close") is not None:
                closed = True
            elif match.group("name") is not None:
                name, blob = match.group("name"), match.group("blob")
                try:
                    validate_account_name(name)
                except InvalidName:
                    raise CorruptRegistry(f"Invalid account name on line {line}") from None
                if not _BLOB_RE.fullmatch(blob):
                    raise CorruptRegistry(f"Invalid encoded credential on line {line}")
                if name in entries:
                    logger.warning("Duplicate account entry ignored", account=name, line=line)
                else:
                    entries[name] = blob

        pos = match.end()

    if not opened or not closed:
        raise CorruptRegistry("Registry is missing its opening or closing brace")
    return entries


def render_registry(entries: dict[str, str]) -> str:
    """Render entries in the canonical one-entry-per-line layout."""
    if not entries:
        return "{}\n"
    body = ",\n".join(f'  "{name}": "{blob}"' for name, blob in entries.items())
    return "{\n" + body + "\n}\n"


class AccountRegistry:
    """Name to encoded credential mapping persisted in the registry file."""

    def __init__(self, path: Path, lock_path: Path | None = None):
        self.path = Path(path)
        self.lock_path = lock_path or self.path.with_name(self.path.name + ".lock")

    def read(self) -> dict[str, str]:
        """Load all entries; a missing file is an empty registry."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        return parse_registry(text)

    def list(self) -> list[Account]:
        """All accounts in file order."""
        return [Account(name=name, encoded=blob) for name, blob in self.read().items()]

    def get(self, name: str) -> str | None:
        """Encoded blob stored under ``name``, if any."""
        return self.read().get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.read()

    def __len__(self) -> int:
        return len(self.read())

    @contextmanager
    def _mutate(self) -> Iterator[dict[str, str]]:
        """Locked read-modify-write; the file is only rewritten if the block succeeds."""
        with locked(self.lock_path):
            entries = self.read()
            yield entries
            atomic_write_text(self.path, render_registry(entries))

    def upsert(self, name: str, encoded: str) -> bool:
        """Replace the blob of ``name`` in place, or append a new entry.

        Returns:
            True if a new entry was appended.
        """
        validate_account_name(name)
        if not _BLOB_RE.fullmatch(encoded):
            raise ValueError("Encoded credential must be base64")

        with self._mutate() as entries:
            created = name not in entries
            entries[name] = encoded

        logger.info("Account stored", account=name, created=created)
        return created

    def remove(self, name: str) -> None:
        """Remove ``name`` from the registry.

        Raises:
            NotFound: no such account.
        """
        with self._mutate() as entries:
            if name not in entries:
                raise NotFound(f"Account not found: {name}")
            del entries[name]

        logger.info("Account removed", account=name)

    def rename(self, old: str, new: str) -> None:
        """Rename ``old`` to ``new`` keeping its blob and position.

        Raises:
            NotFound: ``old`` is absent.
            AlreadyExists: ``new`` is already present.
        """
        validate_account_name(new)

        with self._mutate() as entries:
            if old not in entries:
                raise NotFound(f"Account not found: {old}")
            if new in entries:
                raise AlreadyExists(f"Account already exists: {new}")

            renamed = {(new if name == old else name): blob for name, blob in entries.items()}
            entries.clear()
            entries.update(renamed)

        logger.info("Account renamed", old=old, new=new)
