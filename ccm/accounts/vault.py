"""Account vault: named credential profiles over the secret store and registry."""

import structlog

from ..config.settings import Settings, get_settings
from ..errors import InvalidName, NoCredentials, NoCurrentAccount, NotFound, StoreUnavailable
from ..secrets.base import SecretStore
from ..secrets.manager import create_secret_store
from .credentials import decode_saved_blob, encode_blob, parse_credential_info
from .models import (
    UNKNOWN,
    AccountSummary,
    CurrentAccount,
    SaveResult,
    SwitchResult,
    validate_account_name,
)
from .registry import AccountRegistry

logger = structlog.get_logger("accounts.vault")


class AccountVault:
    """Save, switch, list, rename and delete named credential profiles.

    The secret store holds the single active credential; the registry keeps
    a local backup of every saved one. Accounts are matched to the active
    credential by byte equality, never by a stored identifier.
    """

    def __init__(self, store: SecretStore, registry: AccountRegistry):
        self.store = store
        self.registry = registry

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AccountVault":
        """Create a vault for the configured secret backend and registry file."""
        settings = settings or get_settings()
        return cls(
            store=create_secret_store(settings),
            registry=AccountRegistry(settings.accounts_file, settings.registry_lock_file),
        )

    def _active_blob(self) -> bytes | None:
        try:
            blob, _ = self.store.get()
        except NotFound:
            return None
        return blob

    def save(self, name: str) -> SaveResult:
        """Save the active credential under ``name``, overwriting an existing entry.

        Raises:
            InvalidName: bad account name.
            NoCredentials: nothing is logged in.
            StoreUnavailable: the platform store call failed.
        """
        validate_account_name(name)

        blob = self._active_blob()
        if not blob:
            raise NoCredentials("No credentials found, please log in to Claude Code first")

        created = self.registry.upsert(name, encode_blob(blob))
        info = parse_credential_info(blob)

        logger.info("Account saved", account=name, created=created)
        return SaveResult(
            name=name,
            created=created,
            subscription_type=info.subscription_type,
            expires_at=info.expires_at,
        )

    def switch_to(self, name: str) -> SwitchResult:
        """Make the credential saved under ``name`` the active one.

        The running Claude Code process does not see the change until it is
        restarted; the result carries that advisory.

        Raises:
            InvalidName: bad account name.
            NotFound: no such account.
            StoreUnavailable: the platform store call failed.
        """
        validate_account_name(name)

        encoded = self.registry.get(name)
        if encoded is None:
            raise NotFound(f"Account not found: {name}")
        blob = decode_saved_blob(encoded)

        # Write back under whichever alias currently holds the credential.
        try:
            self._active_blob()
        except StoreUnavailable as e:
            logger.warning(
                "Could not locate active credential, writing to configured service",
                service=self.store.service_name,
                error=str(e),
            )
        self.store.set(blob)

        logger.info("Account switched", account=name, service=self.store.service_name)
        return SwitchResult(name=name, service=self.store.service_name)

    def list(self) -> list[AccountSummary]:
        """All saved accounts in registry order, flagging the active one."""
        try:
            active = self._active_blob()
        except StoreUnavailable as e:
            logger.warning("Could not read active credential", error=str(e))
            active = None

        summaries = []
        for account in self.registry.list():
            blob = decode_saved_blob(account.encoded)
            info = parse_credential_info(blob)
            summaries.append(AccountSummary(
                name=account.name,
                subscription_type=info.subscription_type,
                expires_at=info.expires_at,
                is_active=active is not None and blob == active,
            ))
        return summaries

    def delete(self, name: str) -> None:
        """Delete the saved account ``name``; the active credential is untouched.

        Raises:
            InvalidName: bad account name.
            NotFound: no such account.
        """
        validate_account_name(name)
        self.registry.remove(name)
        logger.info("Account deleted", account=name)

    def rename(self, old: str, new: str) -> None:
        """Rename a saved account, keeping its credential.

        Raises:
            InvalidName: bad name, or ``old`` equals ``new``.
            NotFound: ``old`` is absent.
            AlreadyExists: ``new`` is already taken.
        """
        validate_account_name(old)
        validate_account_name(new)
        if old == new:
            raise InvalidName("Old and new account names are the same")

        self.registry.rename(old, new)
        logger.info("Account renamed", old=old, new=new)

    def current(self) -> CurrentAccount:
        """Describe the active credential and the saved account it matches.

        An active credential that matches no saved account is reported with
        the name ``Unknown``.

        Raises:
            NoCurrentAccount: nothing is logged in.
            StoreUnavailable: the platform store call failed.
        """
        active = self._active_blob()
        if not active:
            raise NoCurrentAccount("No current account, please log in or switch to a saved account")

        name = UNKNOWN
        for account in self.registry.list():
            if decode_saved_blob(account.encoded) == active:
                name = account.name
                break

        info = parse_credential_info(active)
        return CurrentAccount(
            name=name,
            service=self.store.service_name,
            subscription_type=info.subscription_type,
            expires_at=info.expires_at,
            access_token=info.access_token,
            token_preview=info.token_preview,
        )
