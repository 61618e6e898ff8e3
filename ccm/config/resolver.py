"""Layered configuration resolver: environment, config file, built-in defaults."""

import os
import re
from pathlib import Path
from typing import MutableMapping

import structlog

from .defaults import BUILTIN_DEFAULTS, MODEL_OVERRIDE_DEFAULTS, OVERRIDES_MARKER, render_default_config
from .models import ConfigSnapshot, ConfigValue, is_effectively_set, is_placeholder
from .settings import Settings, get_settings

logger = structlog.get_logger("config.resolver")

_ASSIGNMENT_RE = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=(.*)$")

__all__ = [
    "ConfigResolver",
    "parse_config_text",
    "is_effectively_set",
    "is_placeholder",
]


def parse_config_text(text: str) -> dict[str, str]:
    """Parse ``[export ]KEY=VALUE[ #comment]`` lines.

    Comment-only, blank and malformed lines are skipped. Values are not
    quote-aware: everything after ``=`` up to the first ``#`` is kept, minus
    surrounding whitespace. Later assignments win.
    """
    values: dict[str, str] = {}

    for raw in text.splitlines():
        if raw.lstrip().startswith("#"):
            continue

        line = raw.split("#", 1)[0].strip()
        if not line:
            continue

        match = _ASSIGNMENT_RE.match(line)
        if not match:
            continue

        key, value = match.groups()
        values[key] = value.strip()

    return values


def _key_pattern(key: str) -> re.Pattern:
    return re.compile(rf"^\s*(?:export\s+)?{re.escape(key)}\s*=", re.MULTILINE)


class ConfigResolver:
    """Merges environment variables, the persisted config file and defaults.

    Precedence is environment, then file, then built-in defaults; at each
    layer only effectively-set values count, so an empty or placeholder
    environment value is overridden by the file.

    Usage:
        resolver = ConfigResolver()
        snapshot = resolver.load()
        snapshot.resolve("DEEPSEEK_API_KEY")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        environ: MutableMapping[str, str] | None = None,
        defaults: dict[str, str] | None = None,
    ):
        self.settings = settings or get_settings()
        self.config_file: Path = self.settings.config_file
        self.environ = os.environ if environ is None else environ
        self.defaults = BUILTIN_DEFAULTS if defaults is None else defaults

    def bootstrap(self) -> bool:
        """Create the default config file if it does not exist.

        Returns:
            True if the file was created by this call.
        """
        if self.config_file.exists():
            return False

        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.config_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(render_default_config())
        os.chmod(self.config_file, 0o600)

        logger.warning(
            "Config file created, edit it to add your API keys",
            config_file=str(self.config_file),
        )
        return True

    def read_file(self) -> dict[str, str]:
        """Parse the config file; a missing file yields no values."""
        try:
            text = self.config_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        values = parse_config_text(text)
        logger.debug("Config file parsed", config_file=str(self.config_file), keys=len(values))
        return values

    def snapshot(self) -> ConfigSnapshot:
        """Build a fresh snapshot from the current environment and file."""
        return ConfigSnapshot(
            environment=dict(self.environ),
            file_values=self.read_file(),
            defaults=self.defaults,
        )

    def load(self) -> ConfigSnapshot:
        """Bootstrap the config file if needed and return the effective configuration."""
        self.bootstrap()
        return self.snapshot()

    def resolve(self, key: str) -> ConfigValue:
        """Resolve a single key against the current environment and file."""
        return self.snapshot().resolve(key)

    def inject(self, snapshot: ConfigSnapshot | None = None) -> list[str]:
        """Export file values into the environment where it lacks a usable value.

        Returns:
            Keys written into the environment.
        """
        snapshot = snapshot or self.load()
        injected = snapshot.injections()

        for key, value in injected.items():
            self.environ[key] = value

        if injected:
            logger.debug("Injected config file values", keys=sorted(injected))
        return list(injected)

    def ensure_model_overrides(self) -> list[str]:
        """Append model ID overrides missing from the config file.

        Only keys wholly absent from the file are appended, under a marked
        section; existing keys are never modified.

        Returns:
            Keys that were appended.
        """
        self.bootstrap()
        text = self.config_file.read_text(encoding="utf-8")

        missing = [
            (key, default)
            for key, default in MODEL_OVERRIDE_DEFAULTS.items()
            if not _key_pattern(key).search(text)
        ]
        if not missing:
            return []

        lines = []
        if text and not text.endswith("\n"):
            lines.append("")
        lines.append("")
        lines.append(OVERRIDES_MARKER)
        lines.extend(f"{key}={default}" for key, default in missing)

        with open(self.config_file, "a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

        added = [key for key, _ in missing]
        logger.info("Appended missing model overrides", config_file=str(self.config_file), keys=added)
        return added
