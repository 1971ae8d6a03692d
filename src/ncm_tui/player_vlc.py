"""VLC-backed audio player."""

from __future__ import annotations

from datetime import timedelta
import logging
import threading
from typing import Any, Optional, cast

logger = logging.getLogger(__name__)

vlc: Any | None = None
_VLC_IMPORT_ERROR: Optional[Exception] = None


def _load_vlc() -> None:
    global vlc
    global _VLC_IMPORT_ERROR
    if vlc is not None or _VLC_IMPORT_ERROR is not None:
        return
    try:
        import vlc as vlc_module  # type: ignore
    except Exception as exc:  # pragma: no cover - platform-dependent import
        vlc = None
        _VLC_IMPORT_ERROR = exc
    else:
        vlc = cast(Any, vlc_module)
        _VLC_IMPORT_ERROR = None


def _ms_to_timedelta(value: Optional[int]) -> Optional[timedelta]:
    if value is None:
        return None
    return timedelta(milliseconds=value)


class VlcPlayer:
    """Thin wrapper around python-vlc's MediaPlayer.

    VLC decodes on its own threads; the end-of-media callback only sets a
    flag that the UI polls with ``consume_end_reached``.
    """

    def __init__(self) -> None:
        _load_vlc()
        if vlc is None:
            raise RuntimeError(
                "VLC backend is unavailable. Install VLC and the python-vlc package."
            ) from _VLC_IMPORT_ERROR
        try:
            self._instance = cast(Any, vlc).Instance()
            self._player = self._instance.media_player_new()
        except Exception as exc:
            # python-vlc without libVLC fails here with NameError or AttributeError.
            raise RuntimeError(f"VLC backend failed to start: {exc}") from exc
        self._current_media: Optional[str] = None
        self._end_reached = threading.Event()
        self._attach_end_reached_event()

    def _attach_end_reached_event(self) -> None:
        if vlc is None:
            return
        vlc_module = cast(Any, vlc)
        try:
            event_manager = self._player.event_manager()
            event_manager.event_attach(
                vlc_module.EventType.MediaPlayerEndReached, self._handle_end_reached
            )
        except Exception:
            logger.warning("VLC end-of-media events unavailable", exc_info=True)

    def _handle_end_reached(self, event: object) -> None:
        del event
        self._end_reached.set()

    @property
    def current_media(self) -> Optional[str]:
        """Return the current media path if loaded."""
        return self._current_media

    def consume_end_reached(self) -> bool:
        """Return True if an end-reached event fired since last check."""
        if self._end_reached.is_set():
            self._end_reached.clear()
            return True
        return False

    def load(self, path: str) -> None:
        media = self._instance.media_new(path)
        self._player.set_media(media)
        self._current_media = path
        self._end_reached.clear()

    def play(self) -> None:
        self._player.play()

    def stop(self) -> None:
        self._player.stop()

    def set_volume(self, volume: int) -> None:
        """Set volume (0-100)."""
        self._player.audio_set_volume(max(0, min(100, volume)))

    def get_position_ms(self) -> Optional[int]:
        try:
            position = self._player.get_time()
        except Exception:
            return None
        if position is None or position < 0:
            return None
        return int(position)

    def get_length_ms(self) -> Optional[int]:
        try:
            length = self._player.get_length()
        except Exception:
            return None
        if length is None or length <= 0:
            return None
        return int(length)

    def position(self) -> Optional[timedelta]:
        """Current playback position, or None when nothing is loaded."""
        return _ms_to_timedelta(self.get_position_ms())

    def duration(self) -> Optional[timedelta]:
        """Length of the loaded media, or None when unknown."""
        return _ms_to_timedelta(self.get_length_ms())
