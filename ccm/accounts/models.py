"""Account data models and the account name grammar."""

import re
from datetime import datetime

from pydantic import BaseModel, Field

from ..errors import InvalidName
from ..utils.masking import sanitize_for_display

MAX_NAME_LENGTH = 64
ACCOUNT_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]{0,63}")

UNKNOWN = "Unknown"


def validate_account_name(name: str) -> str:
    """Check ``name`` against the account grammar.

    Names start with a letter or digit, continue with letters, digits, ``.``,
    ``_`` or ``-``, and are at most 64 characters long.

    Raises:
        InvalidName: the name is empty, too long or contains other characters.
    """
    if not name:
        raise InvalidName("Account name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidName(f"Account name is too long (max {MAX_NAME_LENGTH} characters)")
    if not ACCOUNT_NAME_RE.fullmatch(name):
        raise InvalidName(
            f"Invalid account name: '{sanitize_for_display(name, 50)}' "
            "(use letters, digits, '.', '_' or '-', starting with a letter or digit)"
        )
    return name


class Account(BaseModel):
    """A saved account: name bound to a base64-encoded credential blob."""
    name: str
    encoded: str = Field(repr=False)


class CredentialSummary(BaseModel):
    """Informational fields read from a credential blob."""
    subscription_type: str = UNKNOWN
    expires_at: datetime | None = None

    @property
    def expires_display(self) -> str:
        """Expiry formatted for output."""
        if self.expires_at is None:
            return UNKNOWN
        return self.expires_at.strftime("%Y-%m-%d %H:%M")


class AccountSummary(CredentialSummary):
    """One row of the account listing."""
    name: str
    is_active: bool = False


class SaveResult(CredentialSummary):
    """Outcome of saving the active credential under a name."""
    name: str
    created: bool = True


class SwitchResult(BaseModel):
    """Outcome of switching the active credential."""
    name: str
    service: str
    restart_required: bool = True
    advisory: str = "Please restart Claude Code for the account switch to take effect"


class CurrentAccount(CredentialSummary):
    """The active credential and the saved account it matches, if any."""
    name: str = UNKNOWN
    service: str
    access_token: str | None = Field(default=None, repr=False)
    token_preview: str = ""

    @property
    def is_saved(self) -> bool:
        return self.name != UNKNOWN
