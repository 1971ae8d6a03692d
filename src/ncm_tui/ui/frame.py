"""Fixed terminal frame layout and the regions components draw into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from rich.console import RenderableType

INFO_STRIP_WIDTH = 26
PLAYBACK_ROW_HEIGHT = 3
COMMAND_LINE_HEIGHT = 1
MIN_SCREEN_HEIGHT = 3


class Region(Protocol):
    """A rectangular area of the frame that accepts one renderable."""

    def render(self, renderable: RenderableType) -> None: ...


@dataclass(frozen=True)
class Frame:
    """The regions of one terminal frame, top to bottom.

    The 26-column strip left of the playback gauge is reserved and has no
    region here.
    """

    screen: Region
    playback: Region
    command_line: Region


def frame_css() -> str:
    """Return the Textual CSS that lays out the frame."""
    return f"""
    #screen_region {{
        height: 1fr;
        min-height: {MIN_SCREEN_HEIGHT};
    }}
    #info_row {{
        height: {PLAYBACK_ROW_HEIGHT};
    }}
    #info_strip {{
        width: {INFO_STRIP_WIDTH};
    }}
    #playback_bar {{
        width: 1fr;
        border: solid $primary;
    }}
    #command_line {{
        height: {COMMAND_LINE_HEIGHT};
    }}
    """
