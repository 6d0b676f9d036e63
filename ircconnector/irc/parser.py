"""IRC message parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors.internal import ProtocolError

_FORBIDDEN_CHARS = ("\r", "\n", "\0")


@dataclass
class IRCMessage:
    raw: str
    prefix: str | None
    command: str | None
    params: str
    tags: dict[str, str]

    @property
    def numeric(self) -> int | None:
        """Reply code for three-digit numerics, None for named commands."""
        if self.command and len(self.command) == 3 and self.command.isdigit():
            return int(self.command)
        return None


def parse_irc_message(raw_line: str) -> IRCMessage:
    tags: dict[str, str] = {}
    prefix: str | None = None
    params = ""
    command: str | None = None

    original = raw_line

    if raw_line.startswith("@"):
        if " " not in raw_line:
            return IRCMessage(raw=original, prefix=None, command=None, params="", tags={})
        tags_part, raw_line = raw_line.split(" ", 1)
        tags = _parse_tags(tags_part[1:])

    if raw_line.startswith(":"):
        remainder = raw_line[1:]
        if " " in remainder:
            prefix, raw_line = remainder.split(" ", 1)
        else:  # malformed; treat whole remainder as prefix and leave rest empty
            prefix = remainder
            raw_line = ""

    trailing = ""
    if " :" in raw_line:
        raw_line, trailing = raw_line.split(" :", 1)

    parts = raw_line.split()
    if parts:
        command = parts[0].upper()
        middle = parts[1:]
        params = " ".join(middle + ([trailing] if trailing else [])).strip()

    return IRCMessage(
        raw=original, prefix=prefix, command=command, params=params, tags=tags
    )


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if "=" in tag:
            k, v = tag.split("=", 1)
        else:
            k, v = tag, ""
        tags[k] = v
    return tags


def check_line(line: str) -> None:
    """Raise ProtocolError if ``line`` would not go out as one IRC line."""
    if any(c in line for c in _FORBIDDEN_CHARS):
        raise ProtocolError(
            "IRC command contains a line break or NUL",
            data={"command": line.split(" ", 1)[0]},
        )
