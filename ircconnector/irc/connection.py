"""asyncio transport for a single IRC connection."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum, auto

from ..constants import (
    CONNECT_TIMEOUT,
    READ_CHUNK_SIZE,
    SECURE_SCHEME,
    TLS_HANDSHAKE_TIMEOUT,
)
from ..errors.internal import NetworkError, TLSUpgradeError
from ..logs.logger import logger
from ..tls import client_context
from ..uri import URI, URIFactory, URIParser, target_uri
from .dispatcher import EventDispatcher
from .models import (
    EventHandler,
    ListenerHandle,
    NumericEvent,
    NumericHandler,
    Trigger,
    TriggerEvent,
)
from .parser import check_line, parse_irc_message
from .protocols import ConfigSource


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    CLOSING = auto()


class StreamSocket:
    """TLS handle over the connection's current stream."""

    def __init__(self, connection: IRCConnection) -> None:
        self.connection = connection

    async def enable_tls(self) -> None:
        conn = self.connection
        writer = conn.writer
        if writer is None or conn.uri is None:
            raise TLSUpgradeError("Connection is not open")
        verify = conn.config.parse_bool("verify_tls", True)
        logger.log_event(
            "connection", "tls_upgrade", level=logging.DEBUG, server=conn.uri.host
        )
        try:
            await asyncio.wait_for(
                writer.start_tls(client_context(verify), server_hostname=conn.uri.host),
                timeout=TLS_HANDSHAKE_TIMEOUT,
            )
        except (OSError, TimeoutError, RuntimeError) as e:
            raise TLSUpgradeError(
                f"TLS handshake failed: {e}", data={"server": conn.uri.host}
            ) from e
        conn.secure = True


class IRCConnection:  # pylint: disable=too-many-instance-attributes
    """Connection to the server named by the last configured URI.

    Registration itself is left to listeners of :attr:`Trigger.LOGON`.
    """

    def __init__(
        self,
        config: ConfigSource,
        *,
        dispatcher: EventDispatcher | None = None,
        uri_factory: URIFactory = URI,
    ) -> None:
        self.config = config
        self.dispatcher = dispatcher or EventDispatcher()
        self.uri_factory = uri_factory
        self.uri: URIParser | None = None
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.state = ConnectionState.DISCONNECTED
        self.secure = False
        self.message_buffer = ""

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "connection",
                "state_change",
                level=logging.DEBUG,
                server=self.uri.host if self.uri else None,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    # Collaborator contract -------------------------------------------------
    def get_config(self) -> ConfigSource:
        return self.config

    def get_socket(self) -> StreamSocket:
        return StreamSocket(self)

    def add_event_listener(
        self, trigger: Trigger, handler: EventHandler
    ) -> ListenerHandle:
        return self.dispatcher.add_event_listener(trigger, handler)

    def add_response_listener(
        self, code: int, handler: NumericHandler
    ) -> ListenerHandle:
        return self.dispatcher.add_response_listener(code, handler)

    def remove_listener(self, handle: ListenerHandle) -> bool:
        return self.dispatcher.remove_listener(handle)

    async def send_command(self, line: str) -> None:
        check_line(line)
        if self.writer is None:
            raise NetworkError("Cannot send on a closed connection")
        shown = "PASS ****" if line.startswith("PASS ") else line
        logger.log_event(
            "connection",
            "send",
            level=logging.DEBUG,
            server=self.uri.host if self.uri else None,
            line=shown,
        )
        try:
            self.writer.write(f"{line}\r\n".encode())
            await self.writer.drain()
        except (ConnectionError, OSError) as e:
            raise NetworkError(f"Write failed: {e}") from e

    async def disconnect(self, message: str | None = None, forced: bool = False) -> None:
        writer = self.writer
        if writer is None:
            return
        self._set_state(ConnectionState.CLOSING)
        logger.log_event(
            "connection",
            "disconnect",
            level=logging.DEBUG if not forced else logging.WARNING,
            server=self.uri.host if self.uri else None,
            forced=forced,
        )
        if forced:
            writer.transport.abort()
        else:
            try:
                await self.send_command(f"QUIT :{message}" if message else "QUIT")
                writer.close()
                await writer.wait_closed()
            except (NetworkError, ConnectionError, OSError) as e:
                logger.log_event(
                    "connection",
                    "close_error",
                    level=logging.DEBUG,
                    error=str(e),
                )
                writer.transport.abort()
        self.writer = None
        self.reader = None
        self.secure = False
        self._set_state(ConnectionState.DISCONNECTED)

    # Lifecycle -------------------------------------------------------------
    async def connect(self) -> None:
        """Open the transport and fire the logon trigger.

        Raises:
            NetworkError: If the server cannot be reached in time.
        """
        uri = target_uri(self.config.get_connection_uris(), self.uri_factory)
        self.uri = uri
        secure = uri.scheme == SECURE_SCHEME
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "connection",
            "connect_start",
            server=uri.host,
            host=uri.host,
            port=uri.port,
            tls=secure,
        )
        ssl_context = (
            client_context(self.config.parse_bool("verify_tls", True)) if secure else None
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(uri.host, uri.port, ssl=ssl_context),
                timeout=CONNECT_TIMEOUT,
            )
        except (OSError, TimeoutError) as e:
            self._set_state(ConnectionState.DISCONNECTED)
            logger.log_event(
                "connection",
                "connect_failed",
                level=logging.ERROR,
                server=uri.host,
                host=uri.host,
                port=uri.port,
                error=str(e) or type(e).__name__,
            )
            raise NetworkError(
                f"Could not connect to {uri.host}:{uri.port}",
                data={"host": uri.host, "port": uri.port},
            ) from e
        self.secure = secure
        self.message_buffer = ""
        self._set_state(ConnectionState.CONNECTED)
        logger.log_event(
            "connection", "connected", server=uri.host, host=uri.host, port=uri.port
        )
        await self.dispatcher.dispatch(TriggerEvent(Trigger.LOGON))

    async def run(self) -> None:
        """Read and dispatch inbound lines until the peer or we close."""
        while self.reader is not None:
            try:
                data = await self.reader.read(READ_CHUNK_SIZE)
            except (ConnectionError, OSError) as e:
                if self.reader is None:
                    break
                raise NetworkError(f"Read failed: {e}") from e
            if not data:
                logger.log_event("connection", "closed", level=logging.INFO)
                await self.disconnect(forced=True)
                break
            self.message_buffer = await self.process_incoming_data(
                self.message_buffer, data.decode("utf-8", errors="replace")
            )

    async def request_exit(self, reason: str | None = None) -> None:
        await self.dispatcher.dispatch(TriggerEvent(Trigger.EXIT, reason=reason))

    async def process_incoming_data(self, buffer: str, new_data: str) -> str:
        buffer += new_data
        while "\n" in buffer:
            line, buffer = buffer.split("\n", 1)
            line = line.rstrip("\r")
            if line.strip():
                await self._handle_line(line)
            if self.writer is None:
                # A handler closed the connection; drop what is left
                return ""
        return buffer

    async def _handle_line(self, raw: str) -> None:
        parsed = parse_irc_message(raw)
        if parsed.command == "PING":
            await self.send_command(f"PONG :{parsed.params}" if parsed.params else "PONG")
            return
        logger.log_event(
            "connection",
            "receive",
            level=logging.DEBUG,
            server=self.uri.host if self.uri else None,
            line=raw,
        )
        code = parsed.numeric
        if code is not None:
            await self.dispatcher.dispatch_numeric(
                NumericEvent(code=code, params=parsed.params, raw=raw)
            )
