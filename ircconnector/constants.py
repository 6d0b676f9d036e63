"""
Configuration constants for the IRC connector.

Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


MODULE_NAME = "ircconnector"

# URI scheme of connections that are TLS-protected from the first byte
SECURE_SCHEME = "ircs"
DEFAULT_PORT = _get_env_int("DEFAULT_PORT", 6667)
DEFAULT_SECURE_PORT = _get_env_int("DEFAULT_SECURE_PORT", 6697)

# IRCv3 tls extension numerics
RPL_STARTTLS = 670
ERR_STARTTLS = 691

# Seconds to wait for RPL_STARTTLS / ERR_STARTTLS; 0 disables the timer
STARTTLS_TIMEOUT = _get_env_int("STARTTLS_TIMEOUT", 30)
CONNECT_TIMEOUT = _get_env_float("CONNECT_TIMEOUT", 15.0)
TLS_HANDSHAKE_TIMEOUT = _get_env_float("TLS_HANDSHAKE_TIMEOUT", 15.0)
READ_CHUNK_SIZE = _get_env_int("READ_CHUNK_SIZE", 4096)

# Announced when identity / hostname / realname are left unset
DEFAULT_IDENTITY = MODULE_NAME
DEFAULT_HOSTNAME = MODULE_NAME
DEFAULT_REALNAME = MODULE_NAME

CONFIG_FILE_ENV = "IRCCONNECTOR_CONF_FILE"
DEFAULT_CONFIG_FILE = "ircconnector.json"
