"""Tests for the command-line grammar."""

from __future__ import annotations

import pytest

from ncm_tui.ui.command_parser import (
    CommandParseError,
    ParseErrorReason,
    command_names,
    format_parse_error,
    parse_command,
)
from ncm_tui.ui.commands import Command, CommandKind, ScreenId


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("quit", Command(CommandKind.QUIT)),
        (":quit", Command(CommandKind.QUIT)),
        ("q", Command(CommandKind.QUIT)),
        ("  QUIT  ", Command(CommandKind.QUIT)),
        ("help", Command.goto(ScreenId.HELP)),
        ("home", Command.goto(ScreenId.MAIN)),
        ("login", Command.goto(ScreenId.LOGIN)),
        ("logout", Command(CommandKind.LOGOUT)),
        ("goto help", Command.goto(ScreenId.HELP)),
        ("goto Main", Command.goto(ScreenId.MAIN)),
        ("next-panel", Command(CommandKind.NEXT_PANEL)),
        ("pause", Command(CommandKind.TOGGLE_PLAY)),
        ("shuffle", Command(CommandKind.TOGGLE_SHUFFLE)),
        ("bottom", Command(CommandKind.GOTO_BOTTOM)),
    ],
)
def test_parse_valid_commands(text: str, expected: Command) -> None:
    assert parse_command(text) == expected


def test_new_playlist_keeps_name() -> None:
    assert parse_command("newpl") == Command.new_playlist()
    assert parse_command("new Road  Trip") == Command.new_playlist("Road Trip")


@pytest.mark.parametrize(
    ("text", "reason", "token"),
    [
        ("", ParseErrorReason.EMPTY, None),
        (":", ParseErrorReason.EMPTY, None),
        ("bogus", ParseErrorReason.UNKNOWN_COMMAND, "bogus"),
        ("quit now", ParseErrorReason.UNEXPECTED_ARGUMENT, "now"),
        ("goto", ParseErrorReason.MISSING_ARGUMENT, "goto"),
        ("goto nowhere", ParseErrorReason.UNKNOWN_SCREEN, "nowhere"),
        ("goto main help", ParseErrorReason.UNEXPECTED_ARGUMENT, "help"),
    ],
)
def test_parse_errors(text: str, reason: ParseErrorReason, token: str | None) -> None:
    with pytest.raises(CommandParseError) as excinfo:
        parse_command(text)
    assert excinfo.value.reason is reason
    assert excinfo.value.token == token


def test_format_parse_error() -> None:
    assert (
        format_parse_error(CommandParseError(ParseErrorReason.UNKNOWN_COMMAND, "zz"))
        == "error: unknown command: 'zz'"
    )
    assert format_parse_error(CommandParseError(ParseErrorReason.EMPTY)) == (
        "error: empty command"
    )


def test_parse_error_is_value_error() -> None:
    error = CommandParseError(ParseErrorReason.EMPTY)
    assert isinstance(error, ValueError)
    assert str(error) == "error: empty command"


def test_every_listed_name_parses() -> None:
    for name in command_names():
        if name == "goto":
            continue
        parse_command(name)
