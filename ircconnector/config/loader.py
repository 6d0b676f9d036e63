"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os

from pydantic import ValidationError

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from ..errors.internal import ConfigurationError
from .core import Config
from .model import ConnectionSettings


class ConfigLoader:
    """Loads a connection configuration from a JSON file."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        """Initialize ConfigLoader.

        Args:
            path: Path to the configuration file. Defaults to the file named
                by the ``IRCCONNECTOR_CONF_FILE`` environment variable.
        """
        if path is None:
            path = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
        self.path = str(path)

    def load_raw(self) -> dict:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(
                "Configuration file not found", data={"path": self.path}
            ) from e
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                f"Unreadable configuration file: {e}", data={"path": self.path}
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration root must be an object", data={"path": self.path}
            )
        return data

    def load_settings(self) -> ConnectionSettings:
        raw = self.load_raw()
        try:
            return ConnectionSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                data={"path": self.path, "errors": e.errors()},
            ) from e

    def get_configuration(self) -> Config:
        """Load and validate the configuration file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid.
        """
        settings = self.load_settings()
        logging.info(
            f"✅ Configuration loaded path={self.path} uris={len(settings.uris)}"
        )
        return Config(settings)
