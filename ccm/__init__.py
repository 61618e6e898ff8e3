"""
Claude Code Model switcher (ccm)

Points Claude Code at different model providers using keys resolved from the
environment, ~/.ccm_config and built-in defaults, and keeps several Claude
accounts in the platform credential store with a local backup registry.
"""

__version__ = "2.3.0"

from .accounts import AccountRegistry, AccountVault
from .config import ConfigResolver, ConfigSnapshot, Settings
from .secrets import SecretStore, create_secret_store

__all__ = [
    "AccountRegistry",
    "AccountVault",
    "ConfigResolver",
    "ConfigSnapshot",
    "SecretStore",
    "Settings",
    "create_secret_store",
]
