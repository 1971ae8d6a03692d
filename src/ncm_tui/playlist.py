"""Tracks, playlists and loading them from a local library."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ncm_tui.metadata import format_display_title, get_track_meta

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".mp3", ".flac", ".wav", ".ogg", ".m4a", ".aac"}
M3U_EXTENSIONS = {".m3u", ".m3u8"}


@dataclass(frozen=True)
class Track:
    """Represents a single track."""

    path: Path
    title: str
    length: Optional[timedelta] = None


class Playlist:
    """An ordered list of tracks."""

    def __init__(self, tracks: Iterable[Track], name: str = "") -> None:
        self.tracks = list(tracks)
        self.name = name

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    def is_empty(self) -> bool:
        return not self.tracks

    def get(self, index: int) -> Optional[Track]:
        if 0 <= index < len(self.tracks):
            return self.tracks[index]
        return None

    def index_of(self, path: Path | str) -> Optional[int]:
        target = Path(path)
        for index, track in enumerate(self.tracks):
            if track.path == target:
                return index
        return None

    def next_index(self, index: int, *, wrap: bool = False) -> Optional[int]:
        if self.is_empty():
            return None
        if index + 1 < len(self.tracks):
            return index + 1
        return 0 if wrap else None


def _is_supported(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def _track_from_path(path: Path) -> Track:
    meta = get_track_meta(path)
    return Track(path=path, title=format_display_title(path, meta), length=meta.length)


def load_from_directory(directory: Path, *, recursive: bool = False) -> Playlist:
    pattern = directory.rglob("*") if recursive else directory.iterdir()
    entries = sorted(p for p in pattern if p.is_file() and _is_supported(p))
    return Playlist((_track_from_path(path) for path in entries), name=directory.name)


def _decode_m3u(raw: bytes, m3u_path: Path) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        # .m3u8 is always UTF-8; plain .m3u falls back to Latin-1.
        if m3u_path.suffix.lower() == ".m3u8":
            raise
        logger.info("Playlist %s is not UTF-8, reading as Latin-1", m3u_path)
        return raw.decode("latin-1")


def load_m3u(m3u_path: Path) -> Playlist:
    """Load an M3U/M3U8 playlist, skipping missing or unsupported entries."""
    tracks: list[Track] = []
    base = m3u_path.parent
    try:
        raw = m3u_path.read_bytes()
    except FileNotFoundError:
        logger.warning("Playlist file missing: %s", m3u_path)
        return Playlist([], name=m3u_path.stem)
    lines = _decode_m3u(raw, m3u_path).splitlines()
    for line in lines:
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        item = Path(entry)
        if not item.is_absolute():
            item = (base / item).resolve()
        if not item.is_file() or not _is_supported(item):
            continue
        tracks.append(_track_from_path(item))
    return Playlist(tracks, name=m3u_path.stem)


def load_from_input(path: Path, *, recursive: bool = False) -> Playlist:
    if path.is_dir():
        return load_from_directory(path, recursive=recursive)
    if path.suffix.lower() in M3U_EXTENSIONS:
        return load_m3u(path)
    if path.is_file() and _is_supported(path):
        return Playlist([_track_from_path(path)], name=path.stem)
    return Playlist([], name=path.name)
