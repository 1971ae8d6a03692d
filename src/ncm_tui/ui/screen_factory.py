from __future__ import annotations

from typing import Sequence

from rich.style import Style

from ncm_tui.shared import Shared
from ncm_tui.ui.help_screen import HelpScreen
from ncm_tui.ui.login_screen import LoginScreen
from ncm_tui.ui.main_screen import MainScreen
from ncm_tui.ui.tui_types import ApiClient, Player


class DefaultScreenFactory:
    """Builds the real screens around the shared collaborators."""

    def __init__(
        self,
        api: Shared[ApiClient],
        player: Shared[Player],
        libraries: Sequence[str],
    ) -> None:
        self._api = api
        self._player = player
        self._libraries = list(libraries)

    def main(self, style: Style) -> MainScreen:
        return MainScreen(self._player, style)

    def login(self, style: Style) -> LoginScreen:
        return LoginScreen(self._api, self._libraries, style)

    def help(self, style: Style) -> HelpScreen:
        return HelpScreen(style)
