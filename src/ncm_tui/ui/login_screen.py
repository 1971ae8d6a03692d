"""Login screen: pick a music library to sign in with."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from rich.console import Group
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from ncm_tui.api import LoginError
from ncm_tui.shared import Shared
from ncm_tui.ui.commands import Command, CommandKind
from ncm_tui.ui.list_pane import ListPane
from ncm_tui.ui.screen_base import BaseScreen
from ncm_tui.ui.tui_formatters import ellipsize
from ncm_tui.ui.tui_types import ApiClient

logger = logging.getLogger(__name__)

HINT = "Up/Down: choose library  Enter: sign in  Esc: clear message"
STATUS_WIDTH = 120


class LoginScreen(BaseScreen):
    title = "Login"

    def __init__(
        self,
        api: Shared[ApiClient],
        libraries: Sequence[str],
        style: Optional[Style] = None,
    ) -> None:
        super().__init__(style)
        self._api = api
        self._libraries = list(libraries)
        self._cursor = 0
        self._status = ""
        self._status_level = "info"
        self._logged_in: Optional[bool] = None

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def status(self) -> str:
        return self._status

    def _set_status(self, text: str, level: str = "info") -> None:
        self._status = ellipsize(text, STATUS_WIDTH)
        self._status_level = level

    async def update_model(self) -> bool:
        async with self._api.lock() as api:
            logged_in = api.is_login()
        if logged_in == self._logged_in:
            return False
        self._logged_in = logged_in
        return True

    async def handle_event(self, command: Command) -> bool:
        kind = command.kind
        if kind in (CommandKind.UP, CommandKind.DOWN):
            if not self._libraries:
                return False
            delta = -1 if kind is CommandKind.UP else 1
            target = max(0, min(len(self._libraries) - 1, self._cursor + delta))
            moved = target != self._cursor
            self._cursor = target
            return moved
        if kind is CommandKind.ESC:
            changed = bool(self._status)
            self._status = ""
            return changed
        if kind is CommandKind.PLAY:
            await self._login_selected()
            return True
        return False

    async def _login_selected(self) -> None:
        if not self._libraries:
            self._set_status("No libraries configured; start with --library PATH", "warn")
            return
        library = self._libraries[self._cursor]
        self._set_status(f"Signing in with {library}...")
        try:
            async with self._api.lock() as api:
                await api.login(library)
        except LoginError as exc:
            logger.warning("Login failed: %s", exc)
            self._set_status(str(exc), "error")
            return
        self._set_status(f"Signed in with {library}")

    def update_view(self, style: Style) -> None:
        super().update_view(style)
        rows = [Text(library) for library in self._libraries]
        status_style = {"warn": "#ffcc66", "error": "#ff5f52"}.get(
            self._status_level, "#8a93a3"
        )
        self._view = Panel(
            Group(
                Text(HINT, style="#8a93a3"),
                Text(self._status or " ", style=status_style),
                ListPane(
                    "Libraries",
                    rows,
                    cursor=self._cursor,
                    focused=True,
                    style=style,
                    empty_text="No libraries configured",
                ),
            ),
            title=self.title,
            style=style,
        )
