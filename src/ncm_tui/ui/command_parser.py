"""Parser for text typed on the command line."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ncm_tui.ui.commands import Command, CommandKind, ScreenId


class ParseErrorReason(Enum):
    EMPTY = "empty command"
    UNKNOWN_COMMAND = "unknown command"
    UNEXPECTED_ARGUMENT = "unexpected argument"
    MISSING_ARGUMENT = "missing argument"
    UNKNOWN_SCREEN = "unknown screen"


class CommandParseError(ValueError):
    """Raised when command-line text does not form a command."""

    def __init__(self, reason: ParseErrorReason, token: Optional[str] = None) -> None:
        self.reason = reason
        self.token = token
        super().__init__(format_parse_error(self))


_SIMPLE_COMMANDS: dict[str, Command] = {
    "quit": Command(CommandKind.QUIT),
    "q": Command(CommandKind.QUIT),
    "help": Command.goto(ScreenId.HELP),
    "h": Command.goto(ScreenId.HELP),
    "main": Command.goto(ScreenId.MAIN),
    "home": Command.goto(ScreenId.MAIN),
    "login": Command.goto(ScreenId.LOGIN),
    "logout": Command(CommandKind.LOGOUT),
    "add": Command(CommandKind.PLAYLIST_ADD),
    "select": Command(CommandKind.SELECT_PLAYLIST),
    "up": Command(CommandKind.UP),
    "down": Command(CommandKind.DOWN),
    "next-panel": Command(CommandKind.NEXT_PANEL),
    "prev-panel": Command(CommandKind.PREV_PANEL),
    "play": Command(CommandKind.PLAY),
    "esc": Command(CommandKind.ESC),
    "pause": Command(CommandKind.TOGGLE_PLAY),
    "toggle": Command(CommandKind.TOGGLE_PLAY),
    "next": Command(CommandKind.NEXT_TRACK),
    "prev": Command(CommandKind.PREV_TRACK),
    "repeat": Command(CommandKind.TOGGLE_REPEAT),
    "shuffle": Command(CommandKind.TOGGLE_SHUFFLE),
    "top": Command(CommandKind.GOTO_TOP),
    "bottom": Command(CommandKind.GOTO_BOTTOM),
}

_NEW_PLAYLIST_TOKENS = {"newpl", "new"}

_SCREEN_NAMES: dict[str, ScreenId] = {
    "main": ScreenId.MAIN,
    "home": ScreenId.MAIN,
    "login": ScreenId.LOGIN,
    "help": ScreenId.HELP,
}


def command_names() -> list[str]:
    """Return every head token the parser accepts."""
    return sorted([*_SIMPLE_COMMANDS, *_NEW_PLAYLIST_TOKENS, "goto"])


def parse_command(text: str) -> Command:
    """Parse one command, raising ``CommandParseError`` on failure."""
    stripped = text.strip()
    if stripped.startswith(":"):
        stripped = stripped[1:].strip()
    if not stripped:
        raise CommandParseError(ParseErrorReason.EMPTY)
    head, *args = stripped.split()
    token = head.lower()

    if token in _NEW_PLAYLIST_TOKENS:
        name = " ".join(args) if args else None
        return Command.new_playlist(name)

    if token == "goto":
        if not args:
            raise CommandParseError(ParseErrorReason.MISSING_ARGUMENT, head)
        if len(args) > 1:
            raise CommandParseError(ParseErrorReason.UNEXPECTED_ARGUMENT, args[1])
        screen = _SCREEN_NAMES.get(args[0].lower())
        if screen is None:
            raise CommandParseError(ParseErrorReason.UNKNOWN_SCREEN, args[0])
        return Command.goto(screen)

    command = _SIMPLE_COMMANDS.get(token)
    if command is None:
        raise CommandParseError(ParseErrorReason.UNKNOWN_COMMAND, head)
    if args:
        raise CommandParseError(ParseErrorReason.UNEXPECTED_ARGUMENT, args[0])
    return command


def format_parse_error(error: CommandParseError) -> str:
    """Render a parse error as a one-line message for the command line."""
    if error.token is None:
        return f"error: {error.reason.value}"
    return f"error: {error.reason.value}: {error.token!r}"
