"""IRC subsystem package.

Contains the connection, parsing, dispatch and registration handshake
modules.
"""

from .connection import ConnectionState, IRCConnection, StreamSocket  # noqa: F401
from .dispatcher import EventDispatcher  # noqa: F401
from .models import (  # noqa: F401
    HandshakeState,
    ListenerHandle,
    NumericEvent,
    RegistrationConfig,
    Trigger,
    TriggerEvent,
)
from .negotiator import Handshake, RegistrationNegotiator  # noqa: F401
from .parser import IRCMessage, parse_irc_message  # noqa: F401

__all__ = [
    "ConnectionState",
    "IRCConnection",
    "StreamSocket",
    "EventDispatcher",
    "HandshakeState",
    "ListenerHandle",
    "NumericEvent",
    "RegistrationConfig",
    "Trigger",
    "TriggerEvent",
    "Handshake",
    "RegistrationNegotiator",
    "IRCMessage",
    "parse_irc_message",
]
