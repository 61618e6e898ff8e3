"""Configuration value models."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict

from ..errors import ConfigMissing


class ConfigSource(str, Enum):
    """Where a resolved configuration value came from."""
    ENVIRONMENT = "environment"
    FILE = "file"
    DEFAULT = "default"
    UNSET = "unset"


def is_placeholder(value: str) -> bool:
    """Detect template values such as ``sk-your-deepseek-api-key``."""
    lowered = value.lower()
    return "your" in lowered and "api" in lowered and "key" in lowered


def is_effectively_set(value: str | None) -> bool:
    """A value counts as set when it is non-empty and not a placeholder."""
    if not value:
        return False
    return not is_placeholder(value)


class ConfigValue(BaseModel):
    """A resolved configuration value tagged with its winning source."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str | None = None
    source: ConfigSource = ConfigSource.UNSET
    effectively_set: bool = False


class ConfigSnapshot:
    """Immutable view of the effective configuration for one invocation.

    Built once by ``ConfigResolver.load()`` and handed to consumers instead of
    having them read ``os.environ`` directly.
    """

    def __init__(
        self,
        environment: Mapping[str, str],
        file_values: Mapping[str, str],
        defaults: Mapping[str, str],
    ):
        self._environment = MappingProxyType(dict(environment))
        self._file_values = MappingProxyType(dict(file_values))
        self._defaults = MappingProxyType(dict(defaults))

    def resolve(self, key: str) -> ConfigValue:
        """Return the first effectively-set value in [environment, file, default]."""
        for source, values in (
            (ConfigSource.ENVIRONMENT, self._environment),
            (ConfigSource.FILE, self._file_values),
            (ConfigSource.DEFAULT, self._defaults),
        ):
            value = values.get(key)
            if value is not None and is_effectively_set(value):
                return ConfigValue(key=key, value=value, source=source, effectively_set=True)

        return ConfigValue(key=key)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the resolved value for ``key`` or ``default`` when unset."""
        resolved = self.resolve(key)
        return resolved.value if resolved.effectively_set else default

    def require(self, key: str) -> str:
        """Return the resolved value for ``key``, raising ConfigMissing when unset."""
        resolved = self.resolve(key)
        if not resolved.effectively_set:
            raise ConfigMissing(key)
        return resolved.value

    def is_set(self, key: str) -> bool:
        return self.resolve(key).effectively_set

    def injections(self) -> dict[str, str]:
        """File values that would be exported into the environment.

        A file value only applies where the environment lacks an
        effectively-set value for the same key.
        """
        return {
            key: value
            for key, value in self._file_values.items()
            if not is_effectively_set(self._environment.get(key, ""))
        }

