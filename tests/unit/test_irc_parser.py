"""
Unit tests for the IRC line parser.
"""

from ircconnector.irc.parser import parse_irc_message


def test_numeric_with_prefix_and_trailing():
    msg = parse_irc_message(":irc.example.org 670 Erebot :STARTTLS successful")

    assert msg.prefix == "irc.example.org"
    assert msg.command == "670"
    assert msg.numeric == 670
    assert msg.params == "Erebot STARTTLS successful"


def test_named_command_has_no_numeric():
    msg = parse_irc_message("ping :irc.example.org")

    assert msg.command == "PING"
    assert msg.numeric is None
    assert msg.params == "irc.example.org"


def test_tags_are_parsed():
    msg = parse_irc_message("@time=2024-01-01T00:00:00Z;flag :srv 001 nick :Welcome")

    assert msg.tags == {"time": "2024-01-01T00:00:00Z", "flag": ""}
    assert msg.numeric == 1


def test_malformed_prefix_only():
    msg = parse_irc_message(":lonely")

    assert msg.prefix == "lonely"
    assert msg.command is None


def test_tags_without_command():
    msg = parse_irc_message("@a=b")

    assert msg.command is None
    assert msg.tags == {}


def test_four_digit_command_is_not_numeric():
    assert parse_irc_message(":srv 1234 x").numeric is None
