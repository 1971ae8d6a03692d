"""Tests for tag reading."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from types import SimpleNamespace

from ncm_tui import metadata


class FakeFrame:
    def __init__(self, text: list[str]) -> None:
        self.text = text


def test_read_track_meta_from_tags(monkeypatch, tmp_path: Path) -> None:
    audio = SimpleNamespace(
        tags={"TPE1": FakeFrame(["Artist"]), "TIT2": FakeFrame(["Title"])},
        info=SimpleNamespace(length=125.5),
    )
    monkeypatch.setattr(metadata, "MutagenFile", lambda _path: audio)
    meta = metadata.read_track_meta(tmp_path / "a.mp3")
    assert meta.artist == "Artist"
    assert meta.title == "Title"
    assert meta.album is None
    assert meta.length == timedelta(seconds=125.5)


def test_read_track_meta_vorbis_style(monkeypatch, tmp_path: Path) -> None:
    audio = SimpleNamespace(
        tags={"artist": ["Band"], "title": [b"Song"], "album": ["  "]},
        info=SimpleNamespace(length=0),
    )
    monkeypatch.setattr(metadata, "MutagenFile", lambda _path: audio)
    meta = metadata.read_track_meta(tmp_path / "a.flac")
    assert (meta.artist, meta.title, meta.album, meta.length) == (
        "Band",
        "Song",
        None,
        None,
    )


def test_read_track_meta_failures(monkeypatch, tmp_path: Path) -> None:
    def boom(_path):
        raise ValueError("bad file")

    monkeypatch.setattr(metadata, "MutagenFile", boom)
    assert metadata.read_track_meta(tmp_path / "a.mp3") == metadata.TrackMeta()
    monkeypatch.setattr(metadata, "MutagenFile", lambda _path: None)
    assert metadata.read_track_meta(tmp_path / "a.mp3") == metadata.TrackMeta()


def test_get_track_meta_caches(monkeypatch, tmp_path: Path) -> None:
    calls: list[Path] = []

    def fake_read(path: Path) -> metadata.TrackMeta:
        calls.append(path)
        return metadata.TrackMeta(title="x")

    path = tmp_path / "cached.mp3"
    monkeypatch.setattr(metadata, "read_track_meta", fake_read)
    monkeypatch.setattr(metadata, "_META_CACHE", {})
    assert metadata.get_track_meta(path).title == "x"
    assert metadata.get_track_meta(path).title == "x"
    assert calls == [path]


def test_format_display_title() -> None:
    path = Path("/music/track01.mp3")
    assert metadata.format_display_title(path) == "track01.mp3"
    assert metadata.format_display_title(path, metadata.TrackMeta(title="T")) == "T"
    assert (
        metadata.format_display_title(path, metadata.TrackMeta(artist="A", title="T"))
        == "A - T"
    )
    assert metadata.format_display_title(path, metadata.TrackMeta(artist="A")) == (
        "track01.mp3"
    )
