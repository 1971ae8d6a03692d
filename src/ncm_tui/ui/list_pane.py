from __future__ import annotations

from typing import Sequence

from rich.console import Console, ConsoleOptions, RenderResult
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from ncm_tui.ui.tui_formatters import visible_window

FOCUSED_BORDER = "bold #5fc9d6"
IDLE_BORDER = "#5b6170"


class ListPane:
    """Bordered list that shows only the rows around its cursor."""

    def __init__(
        self,
        title: str,
        rows: Sequence[Text],
        *,
        cursor: int,
        focused: bool,
        style: Style,
        empty_text: str = "(empty)",
    ) -> None:
        self.title = title
        self.rows = list(rows)
        self.cursor = cursor
        self.focused = focused
        self.style = style
        self.empty_text = empty_text

    def visible_rows(self, height: int) -> list[Text]:
        window = visible_window(self.cursor, len(self.rows), max(1, height - 2))
        lines: list[Text] = []
        for index in window:
            line = self.rows[index].copy()
            line.no_wrap = True
            line.overflow = "ellipsis"
            if index == self.cursor:
                line.stylize("reverse" if self.focused else "bold")
            lines.append(line)
        return lines

    def __rich_console__(
        self, console: Console, options: ConsoleOptions
    ) -> RenderResult:
        height = options.height or options.max_height
        lines = self.visible_rows(height)
        body = Text("\n").join(lines) if lines else Text(self.empty_text, style="dim")
        yield Panel(
            body,
            title=self.title,
            title_align="left",
            border_style=FOCUSED_BORDER if self.focused else IDLE_BORDER,
            style=self.style,
            height=height,
        )
