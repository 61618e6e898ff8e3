"""Redaction of credential values and sanitizing of echoed user input."""

import re

from ..config.models import is_effectively_set

SET = "[set]"
NOT_SET = "[not set]"

_ANSI_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"      # CSI
    r"|\x1b\][^\x07]*\x07"         # OSC, e.g. terminal title
    r"|\x1b[PX^_][^\x1b]*\x1b\\"   # DCS/SOS/PM/APC
    r"|\x1b."
)
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def mask_token(token: str | None) -> str:
    """Show at most the first and last four characters of a secret."""
    if not token:
        return NOT_SET
    if len(token) <= 8:
        return f"{SET} ****"
    return f"{SET} {token[:4]}...{token[-4:]}"


def mask_presence(value: str | None) -> str:
    """Report only whether a value is effectively set."""
    return SET if is_effectively_set(value) else NOT_SET


def sanitize_for_display(value: str, max_len: int = 100) -> str:
    """Strip escape sequences and control characters, then truncate."""
    sanitized = _ANSI_RE.sub("", value)
    sanitized = _CONTROL_RE.sub("", sanitized)
    if len(sanitized) > max_len:
        sanitized = sanitized[:max_len] + "..."
    return sanitized
