"""IRC registration handshake with optional STARTTLS upgrade.

Once the transport is open, but before the server has accepted us, the
negotiator decides whether the plain-text connection must first be
upgraded to TLS and then sends the PASS/NICK/USER sequence.

See https://ircv3.net/specs/deprecated/tls for the STARTTLS extension.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable

from ..constants import (
    ERR_STARTTLS,
    MODULE_NAME,
    RPL_STARTTLS,
    SECURE_SCHEME,
    STARTTLS_TIMEOUT,
)
from ..errors.handling import log_error
from ..errors.internal import (
    HandshakeTimeoutError,
    InternalError,
    InvalidValueError,
    StartTLSRejectedError,
    TLSUnavailableError,
    TLSUpgradeError,
)
from ..logs.logger import logger
from ..tls import tls_supported
from ..uri import URI, URIFactory, URIParser, target_uri
from .models import (
    HandshakeState,
    ListenerHandle,
    NumericEvent,
    RegistrationConfig,
    Trigger,
    TriggerEvent,
)
from .parser import check_line
from .protocols import Connection

HELP_TEXT = (
    "This module does not provide any command. It provides "
    "the bot with the means to connect to IRC servers."
)


class Handshake:
    """State of a single logon sequence.

    A new instance is created on every logon; it is never reused once it
    reaches ``REGISTERED`` or ``ABORTED``.
    """

    def __init__(self, uri: URIParser) -> None:
        self.uri = uri
        self.state = HandshakeState.AWAITING_DECISION
        self.error: InternalError | None = None
        self.listeners: list[ListenerHandle] = []
        self.timeout_task: asyncio.Task[None] | None = None

    def transition(self, new_state: HandshakeState) -> None:
        if self.state != new_state:
            logger.log_event(
                "handshake",
                "state_change",
                level=logging.DEBUG,
                server=self.uri.host,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state


class RegistrationNegotiator:
    """Drives the registration of one connection.

    Args:
        connection: The connection to register on.
        uri_factory: Callable parsing a URI string; see :mod:`ircconnector.uri`.
        tls_available: Probe telling whether a TLS handshake is possible at all.
    """

    def __init__(
        self,
        connection: Connection,
        *,
        uri_factory: URIFactory = URI,
        tls_available: Callable[[], bool] = tls_supported,
    ) -> None:
        self.connection = connection
        self._uri_factory: URIFactory = URI
        self.set_uri_factory(uri_factory)
        self._tls_available = tls_available
        self._handles: list[ListenerHandle] = []
        self._handshake: Handshake | None = None
        self._credentials: RegistrationConfig | None = None

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------
    def attach(self) -> None:
        """Subscribe to the logon and exit triggers of the connection."""
        if self._handles:
            return
        self._handles = [
            self.connection.add_event_listener(Trigger.LOGON, self.handle_logon),
            self.connection.add_event_listener(Trigger.EXIT, self.handle_exit),
        ]

    def detach(self) -> None:
        for handle in self._handles:
            self.connection.remove_listener(handle)
        self._handles = []
        if self._handshake is not None:
            self._retire(self._handshake)

    @property
    def uri_factory(self) -> URIFactory:
        return self._uri_factory

    def set_uri_factory(self, factory: URIFactory) -> None:
        if not callable(factory):
            raise InvalidValueError(
                "A callable returning an object with scheme and host was expected",
                data={"factory": repr(factory)},
            )
        self._uri_factory = factory

    @property
    def handshake(self) -> Handshake | None:
        """The handshake of the current (or last) logon sequence."""
        return self._handshake

    def get_help(self, words: list[str]) -> str | None:
        if len(words) == 1 and words[0].lower() == MODULE_NAME:
            return HELP_TEXT
        return None

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------
    async def handle_logon(self, event: TriggerEvent) -> None:
        config = self.connection.get_config()
        uri = target_uri(config.get_connection_uris(), self._uri_factory)
        if self._handshake is not None:
            self._retire(self._handshake)
        handshake = self._handshake = Handshake(uri)

        upgrade = config.parse_bool("upgrade", False)
        logger.log_event(
            "handshake",
            "logon",
            level=logging.DEBUG,
            server=uri.host,
            scheme=uri.scheme,
            upgrade=upgrade,
        )

        # No upgrade wanted, or the connection is encrypted already.
        if not upgrade or uri.scheme == SECURE_SCHEME:
            logger.log_event(
                "handshake",
                "direct_path",
                level=logging.DEBUG,
                server=uri.host,
                scheme=uri.scheme,
            )
            await self._register(handshake)
            return

        if not self._tls_available():
            logger.log_event(
                "handshake", "tls_unavailable", level=logging.ERROR, server=uri.host
            )
            await self._abort(
                handshake,
                TLSUnavailableError(
                    "TLS support is not available in this runtime",
                    data={"server": uri.host},
                ),
            )
            return

        handshake.listeners = [
            self.connection.add_response_listener(
                RPL_STARTTLS, functools.partial(self.handle_starttls_success, handshake)
            ),
            self.connection.add_response_listener(
                ERR_STARTTLS, functools.partial(self.handle_starttls_failure, handshake)
            ),
        ]
        handshake.transition(HandshakeState.UPGRADE_PENDING)
        try:
            await self.connection.send_command("STARTTLS")
        except InternalError as e:
            self._retire(handshake)
            await self._abort(handshake, e)
            return
        logger.log_event("handshake", "starttls_sent", server=uri.host)

        timeout = config.parse_int("starttls_timeout", STARTTLS_TIMEOUT)
        if timeout > 0 and handshake.state is HandshakeState.UPGRADE_PENDING:
            handshake.timeout_task = asyncio.create_task(
                self._expire_upgrade(handshake, timeout)
            )

    async def handle_starttls_success(
        self, handshake: Handshake, event: NumericEvent
    ) -> None:
        if not self._is_pending(handshake, event):
            return
        self._retire(handshake)
        logger.log_event("handshake", "upgrade_accepted", server=handshake.uri.host)
        try:
            await self.connection.get_socket().enable_tls()
        except (TLSUpgradeError, OSError, TimeoutError) as e:
            logger.log_event(
                "handshake",
                "tls_failed",
                level=logging.ERROR,
                server=handshake.uri.host,
                error=str(e),
            )
            if isinstance(e, TLSUpgradeError):
                error = e
            else:
                error = TLSUpgradeError(str(e), data={"server": handshake.uri.host})
                error.__cause__ = e
            await self._abort(handshake, error)
            return
        logger.log_event("handshake", "tls_enabled", server=handshake.uri.host)
        await self._register(handshake)

    async def handle_starttls_failure(
        self, handshake: Handshake, event: NumericEvent
    ) -> None:
        if not self._is_pending(handshake, event):
            return
        self._retire(handshake)
        logger.log_event(
            "handshake",
            "upgrade_rejected",
            level=logging.ERROR,
            server=handshake.uri.host,
            reply=event.params,
        )
        await self._abort(
            handshake,
            StartTLSRejectedError(
                "Server rejected STARTTLS",
                data={"server": handshake.uri.host, "reply": event.params},
            ),
        )

    async def handle_exit(self, event: TriggerEvent) -> None:
        """Disconnect cleanly, whatever the handshake is doing."""
        config = self.connection.get_config()
        handshake = self._handshake
        if handshake is not None and not handshake.state.is_terminal:
            self._retire(handshake)
            handshake.transition(HandshakeState.ABORTED)
        logger.log_event("handshake", "exit_request", reason=event.reason)
        await self.connection.disconnect(config.parse_string("quit_message", ""))

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    async def send_credentials(self) -> RegistrationConfig:
        """Send PASS (when a password is set), NICK and USER.

        Values are read from the configuration at call time. The third
        field of USER is the host of the target URI, not the configured
        hostname.

        Raises:
            ConfigurationError: If a required value is missing or mistyped.
            ProtocolError: If a value would break IRC line framing; no
                line has been sent in that case.

        Note:
            The server has not accepted us yet when this returns; wait for
            the welcome numeric before treating the bot as connected.
        """
        config = self.connection.get_config()
        credentials = RegistrationConfig.from_config(config)
        uri = target_uri(config.get_connection_uris(), self._uri_factory)
        lines = credentials.commands(uri.host)
        # Nothing goes out unless every line is well-formed
        for line in lines:
            check_line(line)
        for line in lines:
            await self.connection.send_command(line)
        self._credentials = credentials
        logger.log_event(
            "handshake",
            "credentials_sent",
            nick=credentials.nickname,
            server=uri.host,
            with_password=credentials.password != "",
        )
        return credentials

    async def _register(self, handshake: Handshake) -> None:
        if handshake.state not in (
            HandshakeState.AWAITING_DECISION,
            HandshakeState.UPGRADE_PENDING,
        ):
            return
        # Mark first so a re-entrant trigger cannot send the sequence twice
        handshake.transition(HandshakeState.REGISTERED)
        try:
            await self.send_credentials()
        except InternalError as e:
            await self._abort(handshake, e)

    async def _abort(self, handshake: Handshake, error: InternalError) -> None:
        handshake.error = error
        handshake.transition(HandshakeState.ABORTED)
        logger.log_event(
            "handshake",
            "aborted",
            level=logging.WARNING,
            server=handshake.uri.host,
            reason=type(error).__name__,
        )
        log_error("Registration handshake aborted", error)
        await self.connection.disconnect(None, forced=True)

    async def _expire_upgrade(self, handshake: Handshake, timeout: int) -> None:
        await asyncio.sleep(timeout)
        if handshake.state is not HandshakeState.UPGRADE_PENDING:
            return
        # Detach from the task before retiring so it does not cancel itself
        handshake.timeout_task = None
        self._retire(handshake)
        logger.log_event(
            "handshake",
            "upgrade_timeout",
            level=logging.ERROR,
            server=handshake.uri.host,
            timeout=timeout,
        )
        await self._abort(
            handshake,
            HandshakeTimeoutError(
                "No answer to STARTTLS",
                data={"server": handshake.uri.host, "timeout": timeout},
            ),
        )

    def _is_pending(self, handshake: Handshake, event: NumericEvent) -> bool:
        if handshake is self._handshake and handshake.state is HandshakeState.UPGRADE_PENDING:
            return True
        logger.log_event(
            "handshake",
            "stale_response",
            level=logging.DEBUG,
            server=handshake.uri.host,
            state=handshake.state.name,
            code=event.code,
        )
        return False

    def _retire(self, handshake: Handshake) -> None:
        """Drop the STARTTLS listeners and timer of ``handshake``."""
        for handle in handshake.listeners:
            self.connection.remove_listener(handle)
        handshake.listeners = []
        if handshake.timeout_task is not None:
            handshake.timeout_task.cancel()
            handshake.timeout_task = None

    # ------------------------------------------------------------------
    # Announced identity (values from the last registration sent)
    # ------------------------------------------------------------------
    @property
    def net_password(self) -> str | None:
        return self._credentials.password if self._credentials else None

    @property
    def bot_nickname(self) -> str | None:
        """Nickname as configured; it may have changed on IRC since."""
        return self._credentials.nickname if self._credentials else None

    @property
    def bot_identity(self) -> str | None:
        return self._credentials.identity if self._credentials else None

    @property
    def bot_hostname(self) -> str | None:
        """Hostname claimed at registration.

        Most servers ignore it and use a reverse lookup of our address.
        """
        return self._credentials.hostname if self._credentials else None

    @property
    def bot_realname(self) -> str | None:
        return self._credentials.realname if self._credentials else None
