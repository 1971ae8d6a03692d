"""Static help screen listing key bindings and typed commands."""

from __future__ import annotations

from collections import defaultdict
from typing import Mapping, Optional

from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from ncm_tui.ui.command_parser import command_names
from ncm_tui.ui.commands import Command, CommandKind, ScreenId
from ncm_tui.ui.keymap import CHARACTER_BINDINGS, KEY_BINDINGS
from ncm_tui.ui.screen_base import BaseScreen

_SECTIONS: dict[str, list[Command]] = {
    "Navigation": [
        Command(CommandKind.UP),
        Command(CommandKind.DOWN),
        Command(CommandKind.NEXT_PANEL),
        Command(CommandKind.PREV_PANEL),
        Command(CommandKind.GOTO_TOP),
        Command(CommandKind.GOTO_BOTTOM),
        Command(CommandKind.ESC),
    ],
    "Playback": [
        Command(CommandKind.PLAY),
        Command(CommandKind.TOGGLE_PLAY),
        Command(CommandKind.PREV_TRACK),
        Command(CommandKind.NEXT_TRACK),
        Command(CommandKind.TOGGLE_REPEAT),
        Command(CommandKind.TOGGLE_SHUFFLE),
    ],
    "Playlists": [
        Command.new_playlist(),
        Command(CommandKind.PLAYLIST_ADD),
        Command(CommandKind.SELECT_PLAYLIST),
    ],
    "General": [
        Command.goto(ScreenId.MAIN),
        Command.goto(ScreenId.HELP),
        Command(CommandKind.ENTER_COMMAND),
        Command(CommandKind.QUIT),
    ],
}

_LABELS: dict[Command, str] = {
    Command(CommandKind.UP): "Move up",
    Command(CommandKind.DOWN): "Move down",
    Command(CommandKind.NEXT_PANEL): "Next panel",
    Command(CommandKind.PREV_PANEL): "Previous panel",
    Command(CommandKind.GOTO_TOP): "Go to top",
    Command(CommandKind.GOTO_BOTTOM): "Go to bottom",
    Command(CommandKind.ESC): "Back",
    Command(CommandKind.PLAY): "Open / play selected",
    Command(CommandKind.TOGGLE_PLAY): "Play/Pause",
    Command(CommandKind.PREV_TRACK): "Previous track",
    Command(CommandKind.NEXT_TRACK): "Next track",
    Command(CommandKind.TOGGLE_REPEAT): "Repeat",
    Command(CommandKind.TOGGLE_SHUFFLE): "Shuffle",
    Command.new_playlist(): "New playlist",
    Command(CommandKind.PLAYLIST_ADD): "Add to playlist",
    Command(CommandKind.SELECT_PLAYLIST): "Select playlist",
    Command.goto(ScreenId.MAIN): "Main screen",
    Command.goto(ScreenId.HELP): "Help",
    Command(CommandKind.ENTER_COMMAND): "Type a command",
    Command(CommandKind.QUIT): "Quit",
}

_KEY_NAMES = {
    "up": "↑",
    "down": "↓",
    "left": "←",
    "right": "→",
    "tab": "Tab",
    "shift+tab": "Shift+Tab",
    "enter": "Enter",
    "escape": "Esc",
    "f1": "F1",
    " ": "Space",
}


def _format_key(key: str) -> str:
    return _KEY_NAMES.get(key, key)


def _keys_by_command(
    *bindings: Mapping[str, Command],
) -> dict[Command, list[str]]:
    keys: dict[Command, list[str]] = defaultdict(list)
    for table in bindings:
        for key, command in table.items():
            keys[command].append(_format_key(key))
    return keys


def build_help_text() -> Text:
    keys = _keys_by_command(CHARACTER_BINDINGS, KEY_BINDINGS)
    content = Text()
    for section, commands in _SECTIONS.items():
        content.append(f"{section}\n", style="bold #5fc9d6")
        for command in commands:
            key_text = ", ".join(keys.get(command, [])) or "-"
            content.append(f"  {key_text:<14} {_LABELS[command]}\n")
        content.append("\n")
    content.append("Commands (after ':')\n", style="bold #5fc9d6")
    content.append("  " + " ".join(command_names()) + "\n")
    return content


class HelpScreen(BaseScreen):
    title = "Help"

    def __init__(self, style: Optional[Style] = None) -> None:
        super().__init__(style)
        self._view = Panel(build_help_text(), title=self.title, style=self._style)
