"""Common contract for the screens the controller switches between."""

from __future__ import annotations

from typing import Optional, Protocol

from rich.console import RenderableType
from rich.style import Style
from rich.text import Text

from ncm_tui.playlist import Playlist
from ncm_tui.ui.commands import Command
from ncm_tui.ui.frame import Region


class BaseScreen:
    """A screen keeps its own model and builds one renderable from it.

    ``update_model`` and ``handle_event`` return True when the view must be
    rebuilt. ``update_view`` rebuilds it; ``draw`` hands it to a region.
    """

    title = ""

    def __init__(self, style: Optional[Style] = None) -> None:
        self._style = style or Style()
        self._view: RenderableType = Text()

    async def update_model(self) -> bool:
        return False

    async def handle_event(self, command: Command) -> bool:
        return False

    def update_view(self, style: Style) -> None:
        self._style = style

    @property
    def view(self) -> RenderableType:
        return self._view

    def draw(self, region: Region) -> None:
        region.render(self._view)


class PlaylistScreen(Protocol):
    """The main screen as seen by the controller after a login."""

    async def update_model(self) -> bool: ...

    async def handle_event(self, command: Command) -> bool: ...

    def update_view(self, style: Style) -> None: ...

    def draw(self, region: Region) -> None: ...

    def update_playlist_model(self, name: str, playlist: Playlist) -> None: ...


class ScreenFactory(Protocol):
    """Builds fresh screen instances; main and login are rebuilt on (re)login."""

    def main(self, style: Style) -> PlaylistScreen: ...

    def login(self, style: Style) -> BaseScreen: ...

    def help(self, style: Style) -> BaseScreen: ...
