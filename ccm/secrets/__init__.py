"""Platform credential store backends."""

from .base import LEGACY_SERVICE_ALIASES, SecretStore
from .manager import create_secret_store, detect_backend

__all__ = ["LEGACY_SERVICE_ALIASES", "SecretStore", "create_secret_store", "detect_backend"]
