"""
Command-line interface for the Claude Code Model switcher.

Model switch commands print shell export lines on stdout, meant for
``eval "$(ccm deepseek)"``. Everything addressed to the user goes to stderr
for those commands and to stdout for the account and status commands.
"""

import argparse
import os
import re
import shlex
import shutil
import subprocess
import sys

from pydantic import ValidationError

from . import __version__
from .accounts import AccountVault
from .config import ConfigResolver, ConfigSnapshot, Settings
from .errors import CCMError
from .providers import PROVIDERS, build_exports, get_provider, provider_names
from .utils.logging import log_error, setup_logging
from .utils.masking import NOT_SET, mask_presence, mask_token, sanitize_for_display

_MODEL_ACCOUNT_RE = re.compile(r"(claude|sonnet|opus|haiku|s|o|h):(.+)", re.DOTALL)
_TERMINAL_EDITORS = ("vim", "nano")
_GUI_EDITORS = ("cursor", "code")


def _err(message: str = "") -> None:
    print(message, file=sys.stderr)


class CommandContext:
    """Per-invocation settings, resolver and lazily created vault."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.resolver = ConfigResolver(settings)
        self._vault: AccountVault | None = None
        self._snapshot: ConfigSnapshot | None = None

    @property
    def vault(self) -> AccountVault:
        if self._vault is None:
            self._vault = AccountVault.from_settings(self.settings)
        return self._vault

    @property
    def snapshot(self) -> ConfigSnapshot:
        if self._snapshot is None:
            self._snapshot = self.resolver.load()
        return self._snapshot


def _print_exports(ctx: CommandContext, target: str) -> int:
    profile = get_provider(target)
    if profile is None:
        _err(f"❌ Unknown provider: {sanitize_for_display(target)}")
        _err(f"   Available: {', '.join(provider_names())}")
        return 1

    lines = build_exports(profile, ctx.snapshot)
    print("\n".join(lines))
    _err(f"✅ Switched to {profile.display_name}")
    return 0


def _switch_account(ctx: CommandContext, name: str, out=print) -> None:
    result = ctx.vault.switch_to(name)
    out(f"✅ Switched to account: {result.name}")
    out(f"⚠️  {result.advisory}")


def cmd_env(ctx: CommandContext, args: argparse.Namespace) -> int:
    if not args.provider:
        _err(f"Usage: ccm env [{'|'.join(provider_names())}]")
        return 1
    return _print_exports(ctx, args.provider)


def cmd_save_account(ctx: CommandContext, args: argparse.Namespace) -> int:
    result = ctx.vault.save(args.name)
    print(f"✅ Account saved: {result.name}")
    print(f"   Subscription: {result.subscription_type}")
    if result.expires_at:
        print(f"   Expires: {result.expires_display}")
    return 0


def cmd_switch_account(ctx: CommandContext, args: argparse.Namespace) -> int:
    _switch_account(ctx, args.name)
    return 0


def cmd_list_accounts(ctx: CommandContext, args: argparse.Namespace) -> int:
    accounts = ctx.vault.list()
    if not accounts:
        print("No saved accounts")
        print("💡 Log in to Claude Code, then run: ccm save-account <name>")
        return 0

    print("📋 Saved accounts:")
    for account in accounts:
        details = account.subscription_type
        if account.expires_at:
            details += f", expires: {account.expires_display}"
        active = " ✅ (active)" if account.is_active else ""
        print(f"   - {account.name} ({details}){active}")
    return 0


def cmd_delete_account(ctx: CommandContext, args: argparse.Namespace) -> int:
    ctx.vault.delete(args.name)
    print(f"✅ Account deleted: {args.name}")
    return 0


def cmd_rename_account(ctx: CommandContext, args: argparse.Namespace) -> int:
    ctx.vault.rename(args.old, args.new)
    print(f"✅ Account renamed: {args.old} → {args.new}")
    return 0


def cmd_current_account(ctx: CommandContext, args: argparse.Namespace) -> int:
    current = ctx.vault.current()
    print("📊 Current account:")
    print(f"   Account: {current.name}")
    print(f"   Subscription: {current.subscription_type}")
    if current.expires_at:
        print(f"   Token expires: {current.expires_display}")
    print(f"   Access token: {mask_token(current.access_token)}")
    return 0


def cmd_debug_keychain(ctx: CommandContext, args: argparse.Namespace) -> int:
    current = ctx.vault.current()
    print("🔍 Credential store check")
    print(f"   Backend: {ctx.vault.store.backend_name}")
    print(f"   Service: {current.service}")
    print(f"   Subscription: {current.subscription_type}")
    if current.expires_at:
        print(f"   Expires: {current.expires_display}")
    print(f"   Token preview: {mask_token(current.token_preview)}")
    if current.is_saved:
        print(f"✅ Matches saved account: {current.name}")
    else:
        print("⚠️  Active credential does not match any saved account")
    return 0


def cmd_status(ctx: CommandContext, args: argparse.Namespace) -> int:
    snapshot = ctx.snapshot
    print("📊 Current model configuration:")
    print(f"   BASE_URL: {os.environ.get('ANTHROPIC_BASE_URL') or 'Default (Anthropic)'}")
    print(f"   AUTH_TOKEN: {mask_token(os.environ.get('ANTHROPIC_AUTH_TOKEN'))}")
    print(f"   MODEL: {os.environ.get('ANTHROPIC_MODEL') or NOT_SET}")
    print(f"   SMALL_MODEL: {os.environ.get('ANTHROPIC_SMALL_FAST_MODEL') or NOT_SET}")
    print()
    print("🔧 Provider keys:")
    key_vars = dict.fromkeys(p.api_key_var for p in PROVIDERS.values() if p.api_key_var)
    for key in key_vars:
        print(f"   {key}: {mask_presence(snapshot.get(key))}")
    return 0


def _open_editor(path: str) -> bool:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if editor:
        subprocess.run([*shlex.split(editor), path], check=False)
        return True

    for name in _GUI_EDITORS:
        if shutil.which(name):
            subprocess.Popen([name, path])
            return True
    if sys.platform == "darwin" and shutil.which("open"):
        subprocess.run(["open", path], check=False)
        return True
    for name in _TERMINAL_EDITORS:
        if shutil.which(name):
            subprocess.run([name, path], check=False)
            return True
    return False


def cmd_config(ctx: CommandContext, args: argparse.Namespace) -> int:
    resolver = ctx.resolver
    if resolver.bootstrap():
        print(f"📝 Config file created: {resolver.config_file}")

    added = resolver.ensure_model_overrides()
    if added:
        print(f"➕ Added missing model overrides: {', '.join(added)}")

    print(f"Config file: {resolver.config_file}")
    if args.no_edit:
        return 0
    if not _open_editor(str(resolver.config_file)):
        print("❌ No editor found (set $EDITOR, or install cursor, code, vim or nano)")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccm",
        description="Claude Code Model switcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  eval "$(ccm deepseek)"            # Switch the current shell to Deepseek
  eval "$(ccm claude:work)"         # Switch to account 'work', then to Claude Sonnet
  ccm save-account work             # Save the logged-in Claude account as 'work'
  ccm list-accounts                 # Show saved accounts
  ccm status                        # Show current configuration (masked)
        """
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    for profile in PROVIDERS.values():
        sub = subparsers.add_parser(
            profile.name, aliases=list(profile.aliases), help=f"Switch to {profile.display_name}"
        )
        sub.set_defaults(handler=cmd_env, provider=profile.name)

    env_parser = subparsers.add_parser("env", help="Print exports for a provider")
    env_parser.add_argument("provider", nargs="?", help="Provider name")
    env_parser.set_defaults(handler=cmd_env)

    save_parser = subparsers.add_parser("save-account", help="Save the active Claude account")
    save_parser.add_argument("name", help="Account name")
    save_parser.set_defaults(handler=cmd_save_account)

    switch_parser = subparsers.add_parser("switch-account", help="Switch to a saved account")
    switch_parser.add_argument("name", help="Account name")
    switch_parser.set_defaults(handler=cmd_switch_account)

    subparsers.add_parser("list-accounts", help="List saved accounts").set_defaults(
        handler=cmd_list_accounts
    )

    delete_parser = subparsers.add_parser("delete-account", help="Delete a saved account")
    delete_parser.add_argument("name", help="Account name")
    delete_parser.set_defaults(handler=cmd_delete_account)

    rename_parser = subparsers.add_parser("rename-account", help="Rename a saved account")
    rename_parser.add_argument("old", help="Current account name")
    rename_parser.add_argument("new", help="New account name")
    rename_parser.set_defaults(handler=cmd_rename_account)

    subparsers.add_parser("current-account", help="Show the active account").set_defaults(
        handler=cmd_current_account
    )
    subparsers.add_parser("debug-keychain", help="Inspect the active credential").set_defaults(
        handler=cmd_debug_keychain
    )
    subparsers.add_parser("status", aliases=["st"], help="Show current configuration").set_defaults(
        handler=cmd_status
    )

    config_parser = subparsers.add_parser("config", aliases=["cfg"], help="Edit the config file")
    config_parser.add_argument("--no-edit", action="store_true", help="Only update the file")
    config_parser.set_defaults(handler=cmd_config)

    subparsers.add_parser("help", help="Show this help")

    return parser


def _model_with_account(ctx: CommandContext, model: str, account: str) -> int:
    # stdout is reserved for the export lines
    _switch_account(ctx, account, out=_err)
    return _print_exports(ctx, model)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    try:
        settings = Settings()
    except ValidationError as e:
        _err(f"❌ Invalid CCM_* setting: {e}")
        return 2

    setup_logging(settings)
    ctx = CommandContext(settings)
    parser = build_parser()

    match = _MODEL_ACCOUNT_RE.fullmatch(argv[0]) if argv else None

    try:
        if match:
            return _model_with_account(ctx, match.group(1), match.group(2))

        args = parser.parse_args(argv)
        if args.command in (None, "help"):
            parser.print_help()
            return 0 if args.command == "help" else 1
        return args.handler(ctx, args)

    except CCMError as e:
        log_error(e, {"argv": [sanitize_for_display(a) for a in argv]})
        _err(f"❌ {e.error_code}: {sanitize_for_display(e.message, 200)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
