from __future__ import annotations

from datetime import timedelta
from typing import Optional, Protocol

from typing_extensions import TypeAlias

from ncm_tui.playlist import Playlist

FavoriteSonglist: TypeAlias = tuple[str, Playlist]


class ApiClient(Protocol):
    """What the controller and login screen need from the music service."""

    def is_login(self) -> bool: ...

    async def login(self, library: str) -> None: ...

    async def logout(self) -> None: ...

    def user_favorite_songlist(self) -> Optional[FavoriteSonglist]: ...


class PlaybackClock(Protocol):
    def position(self) -> Optional[timedelta]: ...

    def duration(self) -> Optional[timedelta]: ...


class Player(PlaybackClock, Protocol):
    """What the main screen needs to start and follow playback."""

    @property
    def current_media(self) -> Optional[str]: ...

    def load(self, path: str) -> None: ...

    def play(self) -> None: ...

    def consume_end_reached(self) -> bool: ...
