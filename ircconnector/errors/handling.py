from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationError,
    HandshakeTimeoutError,
    InternalError,
    NetworkError,
    StartTLSRejectedError,
    TLSUnavailableError,
    TLSUpgradeError,
)


def classify_error(error: BaseException) -> str:
    """Map an exception to the category used for structured error logging."""
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(
        error,
        TLSUnavailableError | TLSUpgradeError | StartTLSRejectedError,
    ):
        return "tls"
    if isinstance(error, HandshakeTimeoutError | TimeoutError):
        return "timeout"
    if isinstance(error, ConfigurationError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging. The error's
            own ``data`` mapping is merged underneath it.
    """
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update(error.data)
    if context:
        merged.update(context)
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {error}",
        exception=error,
        context=merged or None,
    )
