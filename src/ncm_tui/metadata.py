"""Audio tag reading for track listings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
import logging
from pathlib import Path
from typing import Optional

from mutagen import File as MutagenFile

logger = logging.getLogger(__name__)

_ARTIST_KEYS = ("artist", "ARTIST", "TPE1", "TPE2", "\xa9ART", "aART")
_TITLE_KEYS = ("title", "TITLE", "TIT2", "\xa9nam")
_ALBUM_KEYS = ("album", "ALBUM", "TALB", "\xa9alb")


@dataclass(frozen=True)
class TrackMeta:
    artist: Optional[str] = None
    title: Optional[str] = None
    album: Optional[str] = None
    length: Optional[timedelta] = None


_META_CACHE: dict[Path, TrackMeta] = {}


def _tag_text(value: object | None) -> Optional[str]:
    if value is None:
        return None
    text_attr = getattr(value, "text", None)
    if text_attr is not None:
        value = text_attr
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
        if value is None:
            return None
    if isinstance(value, bytes):
        text = value.decode("utf-8", errors="replace")
    else:
        text = str(value)
    return text.strip() or None


def _first_tag(tags: object | None, keys: tuple[str, ...]) -> Optional[str]:
    getter = getattr(tags, "get", None)
    if getter is None:
        return None
    for key in keys:
        try:
            value = getter(key)
        except (KeyError, ValueError):
            continue
        text = _tag_text(value)
        if text:
            return text
    return None


def _audio_length(audio: object) -> Optional[timedelta]:
    info = getattr(audio, "info", None)
    seconds = getattr(info, "length", None)
    if not isinstance(seconds, (int, float)) or seconds <= 0:
        return None
    return timedelta(seconds=float(seconds))


def read_track_meta(path: Path) -> TrackMeta:
    """Read tags with mutagen; unreadable files yield an empty ``TrackMeta``."""
    try:
        audio = MutagenFile(path)
    except Exception:
        logger.debug("Tag read failed for %s", path, exc_info=True)
        return TrackMeta()
    if not audio:
        return TrackMeta()
    tags = getattr(audio, "tags", None)
    return TrackMeta(
        artist=_first_tag(tags, _ARTIST_KEYS),
        title=_first_tag(tags, _TITLE_KEYS),
        album=_first_tag(tags, _ALBUM_KEYS),
        length=_audio_length(audio),
    )


def get_track_meta(path: Path) -> TrackMeta:
    cached = _META_CACHE.get(path)
    if cached is not None:
        return cached
    meta = read_track_meta(path)
    _META_CACHE[path] = meta
    return meta


def format_display_title(path: Path, meta: Optional[TrackMeta] = None) -> str:
    if meta and meta.title:
        if meta.artist:
            return f"{meta.artist} - {meta.title}"
        return meta.title
    return path.name
