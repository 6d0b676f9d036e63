"""Application wiring: one connection, its negotiator and signal handling."""

from __future__ import annotations

import asyncio
import logging
import signal

from .config.core import Config
from .irc.connection import IRCConnection
from .irc.negotiator import RegistrationNegotiator
from .logs.logger import logger


class SignalHandler:
    """Turns SIGINT/SIGTERM into a single exit request on the connection."""

    def __init__(self, connection: IRCConnection) -> None:
        self.connection = connection
        self.shutdown_initiated = False
        self._tasks: set[asyncio.Task[None]] = set()

    def request_shutdown(self, signum: int) -> None:
        # Idempotent: only the first signal triggers the exit request
        if self.shutdown_initiated:
            return
        self.shutdown_initiated = True
        logger.log_event("app", "signal", level=logging.WARNING, signum=signum)
        task = asyncio.get_running_loop().create_task(
            self.connection.request_exit(reason=f"signal {signum}")
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def install(self) -> None:  # pragma: no cover
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signum, self.request_shutdown, signum)


async def run_connection(config: Config) -> IRCConnection:
    """Connect, register and process inbound lines until disconnected."""
    connection = IRCConnection(config)
    negotiator = RegistrationNegotiator(connection)
    negotiator.attach()
    SignalHandler(connection).install()
    try:
        await connection.connect()
        await connection.run()
    finally:
        negotiator.detach()
    return connection
