"""Layered provider configuration."""

from .models import ConfigSnapshot, ConfigSource, ConfigValue, is_effectively_set, is_placeholder
from .resolver import ConfigResolver, parse_config_text
from .settings import Settings, get_settings

__all__ = [
    "ConfigResolver",
    "ConfigSnapshot",
    "ConfigSource",
    "ConfigValue",
    "Settings",
    "get_settings",
    "is_effectively_set",
    "is_placeholder",
    "parse_config_text",
]
