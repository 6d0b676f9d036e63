"""Protocol definitions for the collaborators of the registration handshake.

The negotiator only talks to these interfaces; :class:`IRCConnection` is the
asyncio implementation and tests supply in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol

from .models import EventHandler, ListenerHandle, NumericHandler, Trigger


class ConfigSource(Protocol):
    """Flat key lookup over the configuration of one connection."""

    def get_connection_uris(self) -> list[str]:
        """Return the configured server URIs, last one authoritative."""
        ...

    def parse_string(self, key: str, default: str | None = None) -> str: ...

    def parse_bool(self, key: str, default: bool | None = None) -> bool: ...

    def parse_int(self, key: str, default: int | None = None) -> int: ...


class TLSSocket(Protocol):
    """Handle on the live transport stream."""

    async def enable_tls(self) -> None:
        """Switch the existing stream to TLS client mode in place.

        Raises:
            TLSUpgradeError: If the TLS handshake cannot be completed.
        """
        ...


class Connection(Protocol):
    """Transport, command sender and listener registry of one connection."""

    async def send_command(self, line: str) -> None:
        """Send one logical IRC line; the transport appends CRLF."""
        ...

    async def disconnect(self, message: str | None = None, forced: bool = False) -> None:
        """Close the connection, with QUIT unless ``forced``."""
        ...

    def get_socket(self) -> TLSSocket: ...

    def get_config(self) -> ConfigSource: ...

    def add_event_listener(
        self, trigger: Trigger, handler: EventHandler
    ) -> ListenerHandle: ...

    def add_response_listener(
        self, code: int, handler: NumericHandler
    ) -> ListenerHandle: ...

    def remove_listener(self, handle: ListenerHandle) -> bool: ...
