"""Tests for formatting helpers."""

from __future__ import annotations

from datetime import timedelta

from ncm_tui.ui.tui_formatters import (
    ellipsize,
    format_clock,
    format_playback_label,
    progress_ratio,
    visible_window,
)


def test_format_clock() -> None:
    assert format_clock(timedelta(seconds=0)) == "00:00"
    assert format_clock(timedelta(seconds=65.9)) == "01:05"
    assert format_clock(timedelta(minutes=75, seconds=3)) == "75:03"
    assert format_clock(timedelta(seconds=-4)) == "00:00"


def test_format_playback_label() -> None:
    label = format_playback_label(timedelta(seconds=61), timedelta(seconds=245))
    assert label == "01:01/04:05"
    assert format_playback_label(None, timedelta(seconds=1)) is None
    assert format_playback_label(timedelta(seconds=1), None) is None


def test_progress_ratio() -> None:
    assert progress_ratio(timedelta(seconds=1), timedelta(seconds=4)) == 0.25
    assert progress_ratio(timedelta(seconds=9), timedelta(seconds=4)) == 1.0
    assert progress_ratio(timedelta(seconds=1), timedelta(0)) == 0.0


def test_ellipsize() -> None:
    assert ellipsize("hello", 10) == "hello"
    assert ellipsize("hello world", 8) == "hello..."
    assert ellipsize("hello", 2) == ".."
    assert ellipsize("hello", 0) == ""


def test_visible_window_keeps_cursor_visible() -> None:
    assert visible_window(0, 3, 10) == range(3)
    assert visible_window(0, 100, 10) == range(0, 10)
    assert visible_window(50, 100, 10) == range(45, 55)
    assert visible_window(99, 100, 10) == range(90, 100)
    assert visible_window(0, 0, 10) == range(0)
