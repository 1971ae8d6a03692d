"""Single-line command entry backed by a Textual ``Input``.

The ``Input`` holds the text and cursor; the controller owns key routing and
feeds editing keys through :meth:`CommandLine.input`. The widget is mounted
hidden and unfocusable so that keys keep reaching the frame screen, and the
visible row is drawn from :meth:`CommandLine.render`.
"""

from __future__ import annotations

from typing import Optional

from rich.style import Style
from rich.text import Text
from textual.widgets import Input

from ncm_tui.ui.frame import Region
from ncm_tui.ui.keymap import KeyPress

# Editing keys, by the ``Input`` action they run.
EDIT_ACTIONS: dict[str, str] = {
    "backspace": "delete_left",
    "ctrl+h": "delete_left",
    "delete": "delete_right",
    "ctrl+d": "delete_right",
    "left": "cursor_left",
    "ctrl+b": "cursor_left",
    "right": "cursor_right",
    "ctrl+f": "cursor_right",
    "ctrl+left": "cursor_left_word",
    "ctrl+right": "cursor_right_word",
    "home": "home",
    "ctrl+a": "home",
    "end": "end",
    "ctrl+e": "end",
    "ctrl+w": "delete_left_word",
    "ctrl+u": "delete_left_all",
    "ctrl+k": "delete_right_all",
}


def build_editor() -> Input:
    editor = Input(id="command_editor")
    editor.can_focus = False
    editor.display = False
    return editor


class CommandLine:
    """Prompt plus an ``Input`` buffer, drawn into the bottom frame row."""

    def __init__(
        self, style: Optional[Style] = None, editor: Optional[Input] = None
    ) -> None:
        self._style = style or Style()
        self._editor = editor or build_editor()
        self._prompt = ""
        self._cursor_visible = False
        self._view = Text()

    @property
    def editor(self) -> Input:
        return self._editor

    # --- Model ---
    def reset(self) -> None:
        self._prompt = ""
        self._editor.value = ""
        self._editor.cursor_position = 0

    def set_prompt(self, text: str) -> None:
        self._prompt = text

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def cursor(self) -> int:
        return self._editor.cursor_position

    @property
    def cursor_visible(self) -> bool:
        return self._cursor_visible

    def set_cursor_visibility(self, visible: bool) -> None:
        self._cursor_visible = visible

    def get_contents(self) -> str:
        return self._editor.value

    def insert_str(self, text: str) -> None:
        self._editor.insert_text_at_cursor(text)

    def input(self, key: KeyPress) -> bool:
        """Apply one editing key; return False when the key is ignored."""
        action = EDIT_ACTIONS.get(key.key)
        if action is not None:
            getattr(self._editor, f"action_{action}")()
            return True
        if key.is_printable:
            self.insert_str(key.character or "")
            return True
        return False

    # --- View ---
    def update_view(self, style: Style) -> None:
        self._style = style
        text = self._editor.value
        line = Text(self._prompt, style=style)
        line.append(text, style=style)
        if self._cursor_visible:
            offset = len(self._prompt) + self.cursor
            if offset >= len(line):
                line.append(" ")
            line.stylize(style + Style(reverse=True), offset, offset + 1)
        line.no_wrap = True
        self._view = line

    def render(self) -> Text:
        return self._view

    def draw(self, region: Region) -> None:
        region.render(self._view)
