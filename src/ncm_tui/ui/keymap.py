"""Normal-mode key bindings and key press value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ncm_tui.ui.commands import NOP, Command, CommandKind, ScreenId

if TYPE_CHECKING:
    from textual import events


class KeyEventKind(Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyPress:
    """One key event as seen by the controller."""

    key: str
    character: Optional[str] = None
    kind: KeyEventKind = KeyEventKind.PRESS

    @classmethod
    def from_event(cls, event: "events.Key") -> KeyPress:
        # Terminals only report presses; auto-repeat arrives as more presses.
        return cls(key=event.key, character=event.character)

    @property
    def is_printable(self) -> bool:
        char = self.character
        return char is not None and len(char) == 1 and char.isprintable()

    @property
    def is_release(self) -> bool:
        return self.kind is KeyEventKind.RELEASE


# Printable keys, matched by character so that "g" and "G" differ.
CHARACTER_BINDINGS: dict[str, Command] = {
    "k": Command(CommandKind.UP),
    "j": Command(CommandKind.DOWN),
    " ": Command(CommandKind.TOGGLE_PLAY),
    ",": Command(CommandKind.PREV_TRACK),
    ".": Command(CommandKind.NEXT_TRACK),
    "r": Command(CommandKind.TOGGLE_REPEAT),
    "s": Command(CommandKind.TOGGLE_SHUFFLE),
    "g": Command(CommandKind.GOTO_TOP),
    "G": Command(CommandKind.GOTO_BOTTOM),
    "1": Command.goto(ScreenId.MAIN),
    "0": Command.goto(ScreenId.HELP),
    "n": Command.new_playlist(),
    "p": Command(CommandKind.PLAYLIST_ADD),
    "x": Command(CommandKind.SELECT_PLAYLIST),
    "q": Command(CommandKind.QUIT),
    ":": Command(CommandKind.ENTER_COMMAND),
}

# Non-printable keys, matched by Textual key name.
KEY_BINDINGS: dict[str, Command] = {
    "up": Command(CommandKind.UP),
    "down": Command(CommandKind.DOWN),
    "right": Command(CommandKind.NEXT_PANEL),
    "tab": Command(CommandKind.NEXT_PANEL),
    "left": Command(CommandKind.PREV_PANEL),
    "shift+tab": Command(CommandKind.PREV_PANEL),
    "enter": Command(CommandKind.PLAY),
    "escape": Command(CommandKind.ESC),
    "f1": Command.goto(ScreenId.HELP),
}


def command_from_key(key: KeyPress) -> Command:
    """Map a Normal-mode key press to a command; unmapped keys give ``NOP``."""
    if key.is_printable:
        command = CHARACTER_BINDINGS.get(key.character or "")
    else:
        command = KEY_BINDINGS.get(key.key)
    return command if command is not None else NOP
