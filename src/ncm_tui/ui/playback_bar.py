"""Playback progress gauge shown to the right of the info strip."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from rich.console import Console, ConsoleOptions, RenderResult
from rich.style import Style
from rich.text import Text

from ncm_tui.ui.frame import Region
from ncm_tui.ui.tui_formatters import format_playback_label, progress_ratio

PLACEHOLDER_LABEL = "--:--/--:--"


class Gauge:
    """Rich renderable: a filled bar with a centered label."""

    def __init__(self, ratio: float, label: str, style: Style) -> None:
        self.ratio = max(0.0, min(1.0, ratio))
        self.label = label
        self.style = style

    def __rich_console__(
        self, console: Console, options: ConsoleOptions
    ) -> RenderResult:
        width = max(1, options.max_width)
        filled = int(self.ratio * width)
        label = self.label[:width]
        start = max(0, (width - len(label)) // 2)
        cells = [" "] * width
        cells[start : start + len(label)] = list(label)
        line = Text("".join(cells), style=self.style, no_wrap=True)
        if filled:
            line.stylize(self.style + Style(reverse=True), 0, filled)
        yield line


class PlaybackBar:
    def __init__(self, style: Optional[Style] = None) -> None:
        self._style = style or Style()
        self.label = PLACEHOLDER_LABEL
        self.ratio = 0.0

    def set_progress(
        self, position: Optional[timedelta], duration: Optional[timedelta]
    ) -> bool:
        """Update label and ratio; returns False (unchanged) if data is missing."""
        label = format_playback_label(position, duration)
        if label is None or position is None or duration is None:
            return False
        self.label = label
        self.ratio = progress_ratio(position, duration)
        return True

    def render(self) -> Gauge:
        return Gauge(self.ratio, self.label, self._style)

    def draw(self, region: Region) -> None:
        region.render(self.render())
