"""Flat key lookup over a validated connection configuration."""

from __future__ import annotations

from ..errors.internal import ConfigurationError
from .model import ConnectionSettings

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})
_MISSING = object()


class Config:
    """Configuration of a single connection.

    Values are looked up on every call so that a reloaded configuration is
    seen by the next reader.
    """

    def __init__(self, settings: ConnectionSettings) -> None:
        self.settings = settings

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        return cls(ConnectionSettings.model_validate(data))

    def reload(self, settings: ConnectionSettings) -> None:
        self.settings = settings

    def get_connection_uris(self) -> list[str]:
        return list(self.settings.uris)

    def _lookup(self, key: str, default: object) -> object:
        value = self.settings.settings.get(key, _MISSING)
        if value is _MISSING:
            if default is None:
                raise ConfigurationError(
                    f"Missing configuration value '{key}'", data={"key": key}
                )
            return default
        return value

    def parse_string(self, key: str, default: str | None = None) -> str:
        value = self._lookup(key, default)
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Configuration value '{key}' must be a string",
                data={"key": key, "value": value},
            )
        return value

    def parse_bool(self, key: str, default: bool | None = None) -> bool:
        value = self._lookup(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise ConfigurationError(
            f"Configuration value '{key}' must be a boolean",
            data={"key": key, "value": value},
        )

    def parse_int(self, key: str, default: int | None = None) -> int:
        value = self._lookup(key, default)
        if isinstance(value, bool):
            raise ConfigurationError(
                f"Configuration value '{key}' must be an integer",
                data={"key": key, "value": value},
            )
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ConfigurationError(
            f"Configuration value '{key}' must be an integer",
            data={"key": key, "value": value},
        )
