"""Textual front end: hosts the fixed frame and drives the controller loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from rich.console import RenderableType
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Static

from ncm_tui.api import LocalLibraryClient
from ncm_tui.hangwatch import LoopWatchdog
from ncm_tui.logging_setup import set_console_level
from ncm_tui.player_vlc import VlcPlayer
from ncm_tui.shared import Shared
from ncm_tui.ui.controller import Controller
from ncm_tui.ui.frame import Frame, frame_css
from ncm_tui.ui.keymap import KeyPress
from ncm_tui.ui.screen_factory import DefaultScreenFactory

logger = logging.getLogger(__name__)


class StaticRegion:
    """Frame region backed by a ``Static``; re-rendering the same object is a no-op."""

    def __init__(self, widget: Static) -> None:
        self._widget = widget
        self._last: Optional[RenderableType] = None

    def render(self, renderable: RenderableType) -> None:
        if renderable is self._last:
            return
        self._last = renderable
        self._widget.update(renderable)


class FrameScreen(Screen):
    """The one Textual screen; every key and tick becomes a loop iteration."""

    # Tab / Shift+Tab must reach the controller instead of moving focus.
    inherit_bindings = False

    class Tick(Message):
        """Periodic iteration without a key."""

    def __init__(
        self,
        controller: Controller,
        *,
        tick_interval: float = 0.1,
        watchdog: Optional[LoopWatchdog] = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._tick_interval = tick_interval
        self._watchdog = watchdog
        self._frame: Optional[Frame] = None

    def compose(self) -> ComposeResult:
        yield Static(id="screen_region")
        with Horizontal(id="info_row"):
            yield Static(id="info_strip")
            yield Static(id="playback_bar")
        yield Static(id="command_line")
        yield self._controller.command_line.editor

    async def on_mount(self) -> None:
        self._frame = Frame(
            screen=StaticRegion(self.query_one("#screen_region", Static)),
            playback=StaticRegion(self.query_one("#playback_bar", Static)),
            command_line=StaticRegion(self.query_one("#command_line", Static)),
        )
        await self._controller.startup()
        await self.run_iteration(None)
        self.set_interval(self._tick_interval, self._post_tick)

    def _post_tick(self) -> None:
        self.post_message(self.Tick())

    async def on_frame_screen_tick(self, message: FrameScreen.Tick) -> None:
        await self.run_iteration(None)

    async def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        await self.run_iteration(KeyPress.from_event(event))

    async def run_iteration(self, key: Optional[KeyPress]) -> None:
        if self._frame is None:
            return
        controller = self._controller
        try:
            self._beat("update_model")
            await controller.update_model()
            self._beat("handle_event")
            keep_running = await controller.handle_event(key)
            self._beat("draw")
            controller.draw(self._frame)
        except Exception:
            logger.exception("Loop iteration failed in %s", self._stage())
            raise
        self._beat("idle")
        if not keep_running:
            self._frame = None
            self.app.exit()

    def _beat(self, stage: str) -> None:
        if self._watchdog is not None:
            self._watchdog.beat(stage)

    def _stage(self) -> str:
        return self._watchdog.stage if self._watchdog is not None else "iteration"


class NcmTuiApp(App):
    """ncm-tui Textual application."""

    TITLE = "ncm-tui"
    CSS = frame_css()
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        controller: Controller,
        *,
        tick_interval: float = 0.1,
        watchdog: Optional[LoopWatchdog] = None,
    ) -> None:
        super().__init__()
        self.controller = controller
        self._tick_interval = tick_interval
        self._watchdog = watchdog

    def get_default_screen(self) -> Screen:
        return FrameScreen(
            self.controller,
            tick_interval=self._tick_interval,
            watchdog=self._watchdog,
        )

    def on_mount(self) -> None:
        self._install_asyncio_exception_handler()
        if self._watchdog is not None:
            self._watchdog.start()
        logger.info("TUI mounted")

    def on_unmount(self) -> None:
        if self._watchdog is not None:
            self._watchdog.stop()
        logger.info("TUI shutdown")

    def _install_asyncio_exception_handler(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        def handler(_loop: asyncio.AbstractEventLoop, context: dict) -> None:
            exc = context.get("exception")
            if exc:
                logger.exception("Asyncio exception", exc_info=exc)
            else:
                logger.error("Asyncio error: %s", context.get("message"))

        loop.set_exception_handler(handler)


def build_controller(
    client: LocalLibraryClient,
    player: VlcPlayer,
    libraries: Sequence[str],
) -> Controller:
    api = Shared(client)
    shared_player = Shared(player)
    return Controller(
        api=api,
        player=shared_player,
        screens=DefaultScreenFactory(api, shared_player, libraries),
    )


# Public entrypoints
def run_tui(
    client: LocalLibraryClient,
    player: VlcPlayer,
    *,
    libraries: Sequence[str],
    tick_interval: float = 0.1,
) -> int:
    """Run the TUI and return an exit code."""
    logger.info("TUI start libraries=%s tick=%.2fs", list(libraries), tick_interval)
    set_console_level(logging.WARNING)
    app = NcmTuiApp(
        build_controller(client, player, libraries),
        tick_interval=tick_interval,
        watchdog=LoopWatchdog(),
    )
    try:
        app.run()
    finally:
        player.stop()
    exit_code = app.return_code or 0
    logger.info("TUI exit code=%s", exit_code)
    return exit_code
