from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigurationError,
    HandshakeTimeoutError,
    InternalError,
    InvalidValueError,
    NetworkError,
    ProtocolError,
    StartTLSRejectedError,
    TLSUnavailableError,
    TLSUpgradeError,
)

__all__ = [
    "log_error",
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
