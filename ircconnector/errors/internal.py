"""Centralized internal error hierarchy.

Classes:
  InternalError          – Base for all internal errors.
  ConfigurationError     – Missing or malformed configuration values.
  InvalidValueError      – An injected collaborator does not fit its contract.
  NetworkError           – Transport/IO issues.
  ProtocolError          – An outbound IRC line would break framing.
  TLSUnavailableError    – The runtime cannot perform a TLS handshake at all.
  TLSUpgradeError        – Switching an existing stream to TLS failed.
  StartTLSRejectedError  – The server answered STARTTLS with ERR_STARTTLS.
  HandshakeTimeoutError  – The server never answered STARTTLS.

None of these are retried internally; reconnect policy belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigurationError(InternalError):
    """Raised when a configuration key is missing or holds an invalid value."""


class InvalidValueError(InternalError):
    """Raised when an injected collaborator does not satisfy its contract."""


class NetworkError(InternalError):
    """Raised for connection, read or write failures on the transport."""


class ProtocolError(InternalError):
    """Raised when an outbound line contains CR, LF or NUL characters."""


class TLSUnavailableError(InternalError):
    """Raised when TLS was requested but the runtime has no TLS support."""


class TLSUpgradeError(InternalError):
    """Raised when the in-place switch of a plain stream to TLS fails."""


class StartTLSRejectedError(InternalError):
    """Recorded when the server answers STARTTLS with a failure numeric."""


class HandshakeTimeoutError(InternalError):
    """Recorded when no STARTTLS answer arrives before the deadline."""


__all__ = [
    "InternalError",
    "ConfigurationError",
    "InvalidValueError",
    "NetworkError",
    "ProtocolError",
    "TLSUnavailableError",
    "TLSUpgradeError",
    "StartTLSRejectedError",
    "HandshakeTimeoutError",
]
