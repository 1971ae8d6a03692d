"""Local music-library client standing in for the remote music service.

Signing in opens a library (a folder, an audio file or an M3U playlist); its
tracks become the user's favorite songlist. The session is just the library
path, handed to ``on_session_change`` so it can be persisted and restored on
the next start.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from ncm_tui.playlist import Playlist, load_from_input
from ncm_tui.ui.tui_types import FavoriteSonglist

logger = logging.getLogger(__name__)

PlaylistLoader = Callable[[Path], Playlist]
SessionCallback = Callable[[Optional[str]], None]


class LoginError(RuntimeError):
    """Raised when a library cannot be opened as a session."""


class LocalLibraryClient:
    def __init__(
        self,
        *,
        recursive: bool = True,
        loader: Optional[PlaylistLoader] = None,
        on_session_change: Optional[SessionCallback] = None,
    ) -> None:
        self._recursive = recursive
        self._loader = loader or self._load_library
        self._on_session_change = on_session_change
        self._library: Optional[Path] = None
        self._favorites: Optional[Playlist] = None

    @property
    def library(self) -> Optional[Path]:
        return self._library

    def is_login(self) -> bool:
        return self._library is not None

    async def login(self, library: str) -> None:
        """Open ``library`` off the event loop and make it the session."""
        path = Path(library).expanduser()
        if not path.exists():
            raise LoginError(f"Library not found: {path}")
        try:
            playlist = await asyncio.to_thread(self._loader, path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read library %s: %s", path, exc)
            raise LoginError(f"Cannot read library {path}: {exc}") from exc
        if playlist.is_empty():
            raise LoginError(f"No supported audio files in {path}")
        if not playlist.name:
            playlist.name = path.name or str(path)
        self._library = path
        self._favorites = playlist
        logger.info("Signed in library=%s tracks=%s", path, len(playlist))
        self._notify(str(path))

    async def logout(self) -> None:
        if self._library is None:
            return
        logger.info("Signed out library=%s", self._library)
        self._library = None
        self._favorites = None
        self._notify(None)

    async def restore_session(self, library: Optional[str]) -> bool:
        """Sign in again from a persisted session; failures are logged only."""
        if not library:
            return False
        try:
            await self.login(library)
        except LoginError as exc:
            logger.warning("Session restore failed: %s", exc)
            self._notify(None)
            return False
        return True

    def user_favorite_songlist(self) -> Optional[FavoriteSonglist]:
        if self._favorites is None:
            return None
        return self._favorites.name, self._favorites

    def _load_library(self, path: Path) -> Playlist:
        return load_from_input(path, recursive=self._recursive)

    def _notify(self, library: Optional[str]) -> None:
        if self._on_session_change is not None:
            self._on_session_change(library)
