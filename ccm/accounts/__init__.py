"""Multi-account credential vault."""

from .credentials import CredentialInfo, decode_blob, decode_saved_blob, encode_blob, parse_credential_info
from .models import (
    Account,
    AccountSummary,
    CurrentAccount,
    SaveResult,
    SwitchResult,
    validate_account_name,
)
from .registry import AccountRegistry, parse_registry, render_registry
from .vault import AccountVault

__all__ = [
    "Account",
    "AccountRegistry",
    "AccountSummary",
    "AccountVault",
    "CredentialInfo",
    "CurrentAccount",
    "SaveResult",
    "SwitchResult",
    "decode_blob",
    "decode_saved_blob",
    "encode_blob",
    "parse_credential_info",
    "parse_registry",
    "render_registry",
    "validate_account_name",
]
