"""Tests for the command-line widget model."""

from __future__ import annotations

import asyncio
from typing import Callable

from rich.style import Style
from textual.app import App, ComposeResult
from textual.widgets import Input

from ncm_tui.ui.command_line import CommandLine
from ncm_tui.ui.keymap import KeyPress


class EditorApp(App):
    CSS = ""

    def __init__(self, line: CommandLine) -> None:
        super().__init__()
        self._line = line

    def compose(self) -> ComposeResult:
        yield self._line.editor


def run_with_editor(
    line: CommandLine, scenario: Callable[[CommandLine], None]
) -> None:
    async def runner() -> None:
        app = EditorApp(line)
        async with app.run_test() as pilot:
            await pilot.pause()
            scenario(line)

    asyncio.run(runner())


def char(value: str) -> KeyPress:
    return KeyPress(key=value, character=value)


def type_into(line: CommandLine, text: str) -> None:
    for value in text:
        assert line.input(char(value))


def test_editor_is_hidden_and_unfocusable() -> None:
    line = CommandLine()
    assert isinstance(line.editor, Input)
    assert line.editor.can_focus is False
    assert line.editor.display is False


def test_supplied_editor_is_used() -> None:
    editor = Input()
    line = CommandLine(editor=editor)
    assert line.editor is editor


def test_typing_goes_through_the_input() -> None:
    line = CommandLine()

    def scenario(line: CommandLine) -> None:
        type_into(line, "plY")
        line.input(KeyPress(key="left"))
        line.input(char("a"))

    run_with_editor(line, scenario)
    assert line.editor.value == "plaY"
    assert line.get_contents() == "plaY"
    assert line.cursor == line.editor.cursor_position == 3


def test_editing_keys() -> None:
    line = CommandLine()
    seen: dict[str, object] = {}

    def scenario(line: CommandLine) -> None:
        type_into(line, "abc")
        line.input(KeyPress(key="backspace"))
        seen["backspace"] = line.get_contents()
        line.input(KeyPress(key="home"))
        line.input(KeyPress(key="delete"))
        seen["delete"] = line.get_contents()
        line.input(KeyPress(key="end"))
        seen["end"] = line.cursor
        line.input(KeyPress(key="ctrl+u"))

    run_with_editor(line, scenario)
    assert seen == {"backspace": "ab", "delete": "b", "end": 1}
    assert line.get_contents() == ""
    assert line.cursor == 0


def test_word_and_kill_keys() -> None:
    line = CommandLine()
    seen: dict[str, object] = {}

    def scenario(line: CommandLine) -> None:
        type_into(line, "goto help")
        line.input(KeyPress(key="ctrl+w"))
        seen["word"] = line.get_contents()
        line.input(KeyPress(key="ctrl+a"))
        line.input(KeyPress(key="ctrl+k"))

    run_with_editor(line, scenario)
    assert seen["word"] == "goto "
    assert line.get_contents() == ""


def test_backspace_at_start_is_harmless() -> None:
    line = CommandLine()

    def scenario(line: CommandLine) -> None:
        assert line.input(KeyPress(key="backspace"))

    run_with_editor(line, scenario)
    assert line.get_contents() == ""


def test_unknown_non_printable_key_is_ignored() -> None:
    line = CommandLine()

    def scenario(line: CommandLine) -> None:
        type_into(line, "x")
        assert line.input(KeyPress(key="f5")) is False

    run_with_editor(line, scenario)
    assert line.get_contents() == "x"


def test_reset_clears_prompt_text_and_cursor() -> None:
    line = CommandLine()

    def scenario(line: CommandLine) -> None:
        type_into(line, "abc")
        line.set_prompt(":")
        line.reset()

    run_with_editor(line, scenario)
    assert line.prompt == ""
    assert line.editor.value == ""
    assert line.cursor == 0


def test_insert_str_places_text_at_cursor() -> None:
    line = CommandLine()

    def scenario(line: CommandLine) -> None:
        line.insert_str("ad")
        line.input(KeyPress(key="left"))
        line.insert_str("dde")

    run_with_editor(line, scenario)
    assert line.get_contents() == "added"
    assert line.cursor == 4


def test_render_shows_prompt_and_cursor_cell() -> None:
    line = CommandLine()

    def scenario(line: CommandLine) -> None:
        type_into(line, "ab")
        line.set_prompt(":")
        line.set_cursor_visibility(True)
        line.update_view(Style())

    run_with_editor(line, scenario)
    text = line.render()
    assert text.plain == ":ab "
    assert any(span.start == 3 and span.end == 4 for span in text.spans)


def test_render_without_cursor_has_no_padding() -> None:
    line = CommandLine()
    line.set_prompt(":")
    line.update_view(Style())
    assert line.render().plain == ":"


def test_draw_hands_view_to_region() -> None:
    rendered: list[object] = []

    class Region:
        def render(self, renderable: object) -> None:
            rendered.append(renderable)

    line = CommandLine()
    line.set_prompt(":")
    line.update_view(Style())
    line.draw(Region())
    assert rendered == [line.render()]
