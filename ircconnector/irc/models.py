"""Shared IRC data models."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from ..constants import DEFAULT_HOSTNAME, DEFAULT_IDENTITY, DEFAULT_REALNAME

if TYPE_CHECKING:  # pragma: no cover
    from .protocols import ConfigSource


class Trigger(Enum):
    LOGON = auto()  # transport established, server has not accepted us yet
    EXIT = auto()  # shutdown requested from outside the protocol


class HandshakeState(Enum):
    AWAITING_DECISION = auto()
    UPGRADE_PENDING = auto()
    REGISTERED = auto()
    ABORTED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (HandshakeState.REGISTERED, HandshakeState.ABORTED)


@dataclass(slots=True, frozen=True)
class TriggerEvent:
    trigger: Trigger
    reason: str | None = None


@dataclass(slots=True, frozen=True)
class NumericEvent:
    code: int
    params: str = ""
    raw: str = ""


EventHandler = Callable[[TriggerEvent], Awaitable[None]]
NumericHandler = Callable[[NumericEvent], Awaitable[None]]


@dataclass(slots=True, frozen=True)
class ListenerHandle:
    """Token returned on registration, used to remove the listener again."""

    key: Trigger | int
    handler: Callable[..., Awaitable[None]]


@dataclass(slots=True, frozen=True)
class RegistrationConfig:
    """Identity announced to the server, captured once per send."""

    password: str
    nickname: str
    identity: str
    hostname: str
    realname: str
    upgrade_requested: bool = False

    @classmethod
    def from_config(cls, config: ConfigSource) -> RegistrationConfig:
        return cls(
            password=config.parse_string("password", ""),
            nickname=config.parse_string("nickname"),
            identity=config.parse_string("identity", DEFAULT_IDENTITY),
            hostname=config.parse_string("hostname", DEFAULT_HOSTNAME),
            realname=config.parse_string("realname", DEFAULT_REALNAME),
            upgrade_requested=config.parse_bool("upgrade", False),
        )

    def commands(self, server_host: str) -> list[str]:
        """Build the PASS/NICK/USER lines in the order the server expects."""
        lines = []
        if self.password != "":
            lines.append(f"PASS {self.password}")
        lines.append(f"NICK {self.nickname}")
        lines.append(
            f"USER {self.identity} {self.hostname} {server_host} :{self.realname}"
        )
        return lines
