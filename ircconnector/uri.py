"""URI parsing for connection targets.

Any callable that takes a URI string and returns an object with ``scheme``,
``host`` and ``port`` attributes can stand in for :class:`URI`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol
from urllib.parse import urlsplit

from .constants import DEFAULT_PORT, DEFAULT_SECURE_PORT, SECURE_SCHEME
from .errors.internal import InvalidValueError


class URIParser(Protocol):
    @property
    def scheme(self) -> str: ...

    @property
    def host(self) -> str: ...

    @property
    def port(self) -> int: ...


URIFactory = Callable[[str], URIParser]


class URI:
    """Default parser for ``irc://`` and ``ircs://`` URIs."""

    def __init__(self, raw: str) -> None:
        parts = urlsplit(raw.strip())
        if not parts.scheme or not parts.hostname:
            raise InvalidValueError(f"Not an absolute URI: {raw!r}", data={"uri": raw})
        self.raw = raw
        # urlsplit lowercases the scheme; keep it as written
        self._scheme = raw.strip().split(":", 1)[0]
        self._host = parts.hostname
        try:
            self._port = parts.port
        except ValueError as e:
            raise InvalidValueError(f"Invalid port in URI: {raw!r}", data={"uri": raw}) from e

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        if self._port is not None:
            return self._port
        return DEFAULT_SECURE_PORT if self._scheme == SECURE_SCHEME else DEFAULT_PORT

    @property
    def is_secure(self) -> bool:
        return self._scheme == SECURE_SCHEME

    def __repr__(self) -> str:
        return f"URI({self.raw!r})"


def target_uri(uris: list[str], factory: URIFactory = URI) -> URIParser:
    """Parse the authoritative (last) entry of a connection's URI list."""
    if not uris:
        raise InvalidValueError("No connection URI configured")
    return factory(uris[-1])
