"""Semantic commands shared by the keymap, the parser and the controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScreenId(Enum):
    """Screens the controller can make active."""

    MAIN = "main"
    LOGIN = "login"
    HELP = "help"


class AppMode(Enum):
    """How key presses are interpreted."""

    NORMAL = "normal"
    COMMAND_ENTRY = "command_entry"


class CommandKind(Enum):
    UP = "up"
    DOWN = "down"
    NEXT_PANEL = "next_panel"
    PREV_PANEL = "prev_panel"
    TOGGLE_PLAY = "toggle_play"
    PREV_TRACK = "prev_track"
    NEXT_TRACK = "next_track"
    PLAY = "play"
    ESC = "esc"
    TOGGLE_REPEAT = "toggle_repeat"
    TOGGLE_SHUFFLE = "toggle_shuffle"
    GOTO_TOP = "goto_top"
    GOTO_BOTTOM = "goto_bottom"
    GOTO_SCREEN = "goto_screen"
    NEW_PLAYLIST = "new_playlist"
    PLAYLIST_ADD = "playlist_add"
    SELECT_PLAYLIST = "select_playlist"
    QUIT = "quit"
    ENTER_COMMAND = "enter_command"
    LOGOUT = "logout"
    NOP = "nop"


# Commands the active screen handles itself.
SCREEN_COMMANDS = frozenset(
    {
        CommandKind.DOWN,
        CommandKind.UP,
        CommandKind.NEXT_PANEL,
        CommandKind.PREV_PANEL,
        CommandKind.ESC,
        CommandKind.PLAY,
    }
)


@dataclass(frozen=True)
class Command:
    """A single semantic action.

    ``screen`` is only set for ``GOTO_SCREEN`` and ``name`` only (optionally)
    for ``NEW_PLAYLIST``.
    """

    kind: CommandKind
    screen: Optional[ScreenId] = None
    name: Optional[str] = None

    @classmethod
    def goto(cls, screen: ScreenId) -> Command:
        return cls(CommandKind.GOTO_SCREEN, screen=screen)

    @classmethod
    def new_playlist(cls, name: Optional[str] = None) -> Command:
        return cls(CommandKind.NEW_PLAYLIST, name=name)

    @property
    def is_screen_command(self) -> bool:
        return self.kind in SCREEN_COMMANDS

    def __str__(self) -> str:
        if self.kind is CommandKind.GOTO_SCREEN and self.screen is not None:
            return f"goto({self.screen.value})"
        if self.kind is CommandKind.NEW_PLAYLIST and self.name:
            return f"new_playlist({self.name})"
        return self.kind.value


NOP = Command(CommandKind.NOP)
