"""Application controller: input translation, command dispatch and redraw gating.

One loop iteration is ``update_model()`` then ``handle_event(key)`` then
``draw(frame)``. At most one queued command is executed per iteration and the
``dirty`` flag decides whether the active screen rebuilds and redraws its view.
The command line and the playback gauge are redrawn on every iteration.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
import logging
from typing import Optional

from rich.style import Style

from ncm_tui.shared import Shared
from ncm_tui.ui.command_line import CommandLine
from ncm_tui.ui.command_parser import (
    CommandParseError,
    format_parse_error,
    parse_command,
)
from ncm_tui.ui.commands import AppMode, Command, CommandKind, ScreenId
from ncm_tui.ui.frame import Frame
from ncm_tui.ui.keymap import KeyPress, command_from_key
from ncm_tui.ui.playback_bar import PlaybackBar
from ncm_tui.ui.screen_base import BaseScreen, PlaylistScreen, ScreenFactory
from ncm_tui.ui.tui_types import ApiClient, PlaybackClock

logger = logging.getLogger(__name__)

COMMAND_PROMPT = ":"
LOGOUT_FIRST = "you have to logout from current account first!"


@dataclass
class AppState:
    current_screen: ScreenId = ScreenId.MAIN
    current_mode: AppMode = AppMode.NORMAL
    dirty: bool = True
    command_queue: deque[Command] = field(default_factory=deque)


class Controller:
    def __init__(
        self,
        *,
        api: Shared[ApiClient],
        player: Shared[PlaybackClock],
        screens: ScreenFactory,
        style: Optional[Style] = None,
        command_line: Optional[CommandLine] = None,
        playback_bar: Optional[PlaybackBar] = None,
    ) -> None:
        self._api = api
        self._player = player
        self._screens = screens
        self._style = style or Style()
        self.state = AppState()
        self.command_line = command_line or CommandLine(self._style)
        self.playback_bar = playback_bar or PlaybackBar(self._style)
        self._main: PlaylistScreen = screens.main(self._style)
        self._login: BaseScreen = screens.login(self._style)
        self._help: BaseScreen = screens.help(self._style)

    @property
    def active_screen(self) -> PlaylistScreen | BaseScreen:
        screen = self.state.current_screen
        if screen is ScreenId.LOGIN:
            return self._login
        if screen is ScreenId.HELP:
            return self._help
        return self._main

    def enqueue(self, command: Command) -> None:
        self.state.command_queue.append(command)

    async def startup(self) -> None:
        """Show the restored session, or queue a switch to the login screen."""
        if await self._is_login():
            await self.init_after_login()
        else:
            self.enqueue(Command.goto(ScreenId.LOGIN))

    async def init_after_login(self) -> None:
        """Rebuild main and login from the signed-in account and show main."""
        async with self._api.lock() as api:
            songlist = api.user_favorite_songlist()
        self._main = self._screens.main(self._style)
        self._login = self._screens.login(self._style)
        if songlist is not None:
            name, playlist = songlist
            self._main.update_playlist_model(name, playlist)
        else:
            logger.warning("Signed in without a favorite songlist")
        self.state.current_screen = ScreenId.MAIN
        self.state.dirty = True
        logger.info("Session ready, showing main screen")

    # --- Model ---
    async def update_model(self) -> bool:
        current = self.state.current_screen
        if current is ScreenId.HELP:
            dirty = False
        elif current is ScreenId.LOGIN:
            dirty = await self._login.update_model()
            if await self._is_login():
                await self.init_after_login()
                dirty = True
        else:
            dirty = await self._main.update_model()
        await self._update_playback_label()
        self.state.dirty = dirty
        return dirty

    async def _update_playback_label(self) -> None:
        async with self._player.lock() as player:
            position = player.position()
            duration = player.duration()
        self.playback_bar.set_progress(position, duration)

    async def _is_login(self) -> bool:
        async with self._api.lock() as api:
            return api.is_login()

    # --- Input ---
    async def handle_event(self, key: Optional[KeyPress]) -> bool:
        """Translate ``key`` and run the next queued command.

        Returns False when the application should quit.
        """
        if key is not None and not key.is_release:
            self._translate(key)
        if not self.state.command_queue:
            return True
        return await self._dispatch(self.state.command_queue.popleft())

    def _translate(self, key: KeyPress) -> None:
        if self.state.current_mode is AppMode.NORMAL:
            self.enqueue(command_from_key(key))
            return
        if key.key == "enter":
            self._parse_command()
            self._set_mode(AppMode.NORMAL)
        elif key.key == "escape":
            self.command_line.reset()
            self._set_mode(AppMode.NORMAL)
        else:
            self.command_line.input(key)

    def _parse_command(self) -> None:
        text = self.command_line.get_contents()
        self.command_line.reset()
        try:
            command = parse_command(text)
        except CommandParseError as exc:
            logger.info("Rejected command %r: %s", text, exc)
            self.show_prompt(format_parse_error(exc))
            return
        logger.debug("Parsed command %r as %s", text, command)
        self.enqueue(command)

    def show_prompt(self, text: str) -> None:
        self.command_line.reset()
        self.command_line.insert_str(text)

    def _set_mode(self, mode: AppMode) -> None:
        self.state.current_mode = mode

    # --- Dispatch ---
    async def _dispatch(self, command: Command) -> bool:
        kind = command.kind
        if kind is CommandKind.QUIT:
            logger.info("Quit requested")
            return False
        if kind is CommandKind.GOTO_SCREEN and command.screen is not None:
            await self._switch_screen(command.screen)
        elif kind is CommandKind.ENTER_COMMAND:
            self._set_mode(AppMode.COMMAND_ENTRY)
            self.command_line.reset()
            self.command_line.set_prompt(COMMAND_PROMPT)
        elif kind is CommandKind.LOGOUT:
            await self._logout()
        elif command.is_screen_command:
            changed = await self.active_screen.handle_event(command)
            self.state.dirty = self.state.dirty or changed
        return True

    async def _switch_screen(self, screen: ScreenId) -> None:
        if screen is ScreenId.LOGIN and await self._is_login():
            logger.info("Login screen refused: already signed in")
            self.show_prompt(LOGOUT_FIRST)
            return
        logger.info("Switching screen %s -> %s", self.state.current_screen.value, screen.value)
        self.state.current_screen = screen
        self.state.dirty = True

    async def _logout(self) -> None:
        self._login = self._screens.login(self._style)
        async with self._api.lock() as api:
            await api.logout()
        logger.info("Logged out")

    # --- View ---
    def update_view(self) -> None:
        self.command_line.set_cursor_visibility(
            self.state.current_mode is AppMode.COMMAND_ENTRY
        )
        self.command_line.update_view(self._style)
        if self.state.dirty:
            self.active_screen.update_view(self._style)

    def draw(self, frame: Frame) -> None:
        self.update_view()
        if self.state.dirty:
            self.active_screen.draw(frame.screen)
        self.playback_bar.draw(frame.playback)
        self.command_line.draw(frame.command_line)
