"""Credential blob codec and best-effort metadata extraction.

The registry stores blobs base64 encoded so they never contain the
registry's delimiters. Base64 is an encoding for compatibility, not
encryption: anyone who can read the registry file can read the credentials.
"""

import base64
import binascii
import re
from datetime import datetime

import structlog
from pydantic import BaseModel, Field

from ..errors import CorruptRegistry
from .models import UNKNOWN

logger = structlog.get_logger("accounts.credentials")

_SUBSCRIPTION_RE = re.compile(r'"subscriptionType"\s*:\s*"([^"]*)"')
_EXPIRES_RE = re.compile(r'"expiresAt"\s*:\s*(\d+)')
_ACCESS_TOKEN_RE = re.compile(r'"accessToken"\s*:\s*"([^"]*)"')

TOKEN_PREVIEW_LENGTH = 20


class CredentialInfo(BaseModel):
    """Display fields read from a credential blob; never validated or mutated."""
    subscription_type: str = UNKNOWN
    expires_at: datetime | None = None
    access_token: str | None = Field(default=None, repr=False)

    @property
    def token_preview(self) -> str:
        return (self.access_token or "")[:TOKEN_PREVIEW_LENGTH]


def encode_blob(blob: bytes) -> str:
    """Encode a credential blob for the registry."""
    return base64.b64encode(blob).decode("ascii")


def decode_blob(encoded: str) -> bytes:
    """Decode a registry value back to the original credential bytes.

    Raises:
        CorruptRegistry: the value is not valid base64.
    """
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CorruptRegistry(f"Stored credential is not valid base64: {e}")


def decode_saved_blob(encoded: str) -> bytes:
    """Decode a registry value into the blob the secret store would hold.

    Registries written by the shell version encoded ``echo "$credentials"``,
    so their blobs carry one trailing newline that the credential itself
    never has (the Keychain read path drops it too). Exactly one is removed.
    """
    blob = decode_blob(encoded)
    if blob.endswith(b"\n"):
        blob = blob[:-1]
    return blob


def _parse_expiry(raw: str) -> datetime | None:
    try:
        return datetime.fromtimestamp(int(raw) / 1000)
    except (OverflowError, OSError, ValueError):
        return None


def parse_credential_info(blob: bytes) -> CredentialInfo:
    """Extract subscription tier, expiry and access token from a blob.

    Extraction is best-effort: anything missing or unreadable is reported as
    unknown rather than raising.
    """
    text = blob.decode("utf-8", errors="replace")
    info = CredentialInfo()

    match = _SUBSCRIPTION_RE.search(text)
    if match and match.group(1):
        info.subscription_type = match.group(1)

    match = _EXPIRES_RE.search(text)
    if match:
        info.expires_at = _parse_expiry(match.group(1))

    match = _ACCESS_TOKEN_RE.search(text)
    if match:
        info.access_token = match.group(1)

    if info.subscription_type == UNKNOWN and info.expires_at is None:
        logger.debug("No display metadata found in credential blob")
    return info
