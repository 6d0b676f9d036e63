"""Configuration package."""

from .core import Config
from .loader import ConfigLoader
from .model import ConnectionSettings

__all__ = ["Config", "ConfigLoader", "ConnectionSettings"]
