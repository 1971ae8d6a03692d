"""Main screen: the user's playlists beside the tracks of the open one."""

from __future__ import annotations

import asyncio
from enum import Enum
import logging
from typing import Optional

from rich.style import Style
from rich.table import Table
from rich.text import Text

from ncm_tui.playlist import Playlist, Track
from ncm_tui.shared import Shared
from ncm_tui.ui.commands import Command, CommandKind
from ncm_tui.ui.list_pane import ListPane
from ncm_tui.ui.screen_base import BaseScreen
from ncm_tui.ui.tui_formatters import format_clock
from ncm_tui.ui.tui_types import Player

logger = logging.getLogger(__name__)


class Pane(Enum):
    PLAYLISTS = 0
    TRACKS = 1


def _load_and_play(player: Player, path: str) -> None:
    player.load(path)
    player.play()


class MainScreen(BaseScreen):
    title = "Main"

    def __init__(self, player: Shared[Player], style: Optional[Style] = None) -> None:
        super().__init__(style)
        self._player = player
        self._playlists: list[Playlist] = []
        self._focus = Pane.PLAYLISTS
        self._playlist_cursor = 0
        self._track_cursor = 0
        self._open_index: Optional[int] = None
        self._playing_playlist: Optional[int] = None
        self._playing_path: Optional[str] = None
        self._changed = True

    # --- Model ---
    @property
    def focus(self) -> Pane:
        return self._focus

    @property
    def playlists(self) -> list[Playlist]:
        return list(self._playlists)

    @property
    def open_playlist(self) -> Optional[Playlist]:
        if self._open_index is None:
            return None
        return self._playlists[self._open_index]

    @property
    def playlist_cursor(self) -> int:
        return self._playlist_cursor

    @property
    def track_cursor(self) -> int:
        return self._track_cursor

    @property
    def playing_path(self) -> Optional[str]:
        return self._playing_path

    def update_playlist_model(self, name: str, playlist: Playlist) -> None:
        """Install the favorite songlist as the first, open playlist."""
        playlist.name = name
        if self._playlists:
            self._playlists[0] = playlist
        else:
            self._playlists.append(playlist)
        self._playlist_cursor = 0
        self._track_cursor = 0
        self._open_index = 0
        self._changed = True

    async def update_model(self) -> bool:
        async with self._player.lock() as player:
            current = player.current_media
            ended = player.consume_end_reached()
        changed = self._changed
        self._changed = False
        if current != self._playing_path:
            self._playing_path = current
            changed = True
        if ended:
            changed = await self._advance() or changed
        return changed

    async def handle_event(self, command: Command) -> bool:
        kind = command.kind
        if kind is CommandKind.UP:
            return self._move_cursor(-1)
        if kind is CommandKind.DOWN:
            return self._move_cursor(1)
        if kind in (CommandKind.NEXT_PANEL, CommandKind.PREV_PANEL):
            self._focus = Pane.TRACKS if self._focus is Pane.PLAYLISTS else Pane.PLAYLISTS
            return True
        if kind is CommandKind.ESC:
            if self._focus is Pane.TRACKS:
                self._focus = Pane.PLAYLISTS
                return True
            return False
        if kind is CommandKind.PLAY:
            if self._focus is Pane.PLAYLISTS:
                return self._open_selected()
            if self._open_index is None:
                return False
            return await self._play(self._open_index, self._track_cursor)
        return False

    def _move_cursor(self, delta: int) -> bool:
        if self._focus is Pane.PLAYLISTS:
            count = len(self._playlists)
            target = max(0, min(count - 1, self._playlist_cursor + delta))
            if count == 0 or target == self._playlist_cursor:
                return False
            self._playlist_cursor = target
            return True
        playlist = self.open_playlist
        count = len(playlist) if playlist else 0
        target = max(0, min(count - 1, self._track_cursor + delta))
        if count == 0 or target == self._track_cursor:
            return False
        self._track_cursor = target
        return True

    def _open_selected(self) -> bool:
        if not self._playlists:
            return False
        self._open_index = self._playlist_cursor
        self._track_cursor = 0
        self._focus = Pane.TRACKS
        return True

    async def _play(self, playlist_index: int, track_index: int) -> bool:
        track = self._playlists[playlist_index].get(track_index)
        if track is None:
            return False
        async with self._player.lock() as player:
            await asyncio.to_thread(_load_and_play, player, str(track.path))
        self._playing_playlist = playlist_index
        self._playing_path = str(track.path)
        logger.info("Playing %s (%s)", track.title, track.path)
        return True

    async def _advance(self) -> bool:
        if self._playing_playlist is None or self._playing_path is None:
            return False
        playlist = self._playlists[self._playing_playlist]
        current = playlist.index_of(self._playing_path)
        next_index = playlist.next_index(current) if current is not None else None
        if next_index is None:
            logger.info("End of playlist %s", playlist.name)
            return False
        return await self._play(self._playing_playlist, next_index)

    # --- View ---
    def _playlist_rows(self) -> list[Text]:
        rows: list[Text] = []
        for index, playlist in enumerate(self._playlists):
            marker = "*" if index == self._open_index else " "
            rows.append(Text(f"{marker} {playlist.name} ({len(playlist)})"))
        return rows

    def _track_row(self, index: int, track: Track) -> Text:
        is_playing = str(track.path) == self._playing_path
        prefix = f"{'>>' if is_playing else '  '} {index + 1:>3}  "
        length = format_clock(track.length) if track.length else ""
        line = Text(prefix, style="#5b6170")
        line.append(
            track.title,
            style="bold #5fc9d6" if is_playing else "",
        )
        if length:
            line.append(f"  {length}", style="#8a93a3")
        return line

    def update_view(self, style: Style) -> None:
        super().update_view(style)
        playlist = self.open_playlist
        tracks = (
            [self._track_row(i, t) for i, t in enumerate(playlist)] if playlist else []
        )
        grid = Table.grid(expand=True)
        grid.add_column(ratio=1)
        grid.add_column(ratio=3)
        grid.add_row(
            ListPane(
                "Playlists",
                self._playlist_rows(),
                cursor=self._playlist_cursor,
                focused=self._focus is Pane.PLAYLISTS,
                style=style,
                empty_text="Not signed in (:login)",
            ),
            ListPane(
                playlist.name if playlist else "Tracks",
                tracks,
                cursor=self._track_cursor,
                focused=self._focus is Pane.TRACKS,
                style=style,
            ),
        )
        self._view = grid
