from __future__ import annotations

from datetime import timedelta
from typing import Optional


def format_clock(value: timedelta) -> str:
    """Format as ``MM:SS``; minutes keep counting past an hour."""
    total_seconds = max(0, int(value.total_seconds()))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def format_playback_label(
    position: Optional[timedelta], duration: Optional[timedelta]
) -> Optional[str]:
    """Return ``MM:SS/MM:SS`` or None when either side is unknown."""
    if position is None or duration is None:
        return None
    return f"{format_clock(position)}/{format_clock(duration)}"


def progress_ratio(position: timedelta, duration: timedelta) -> float:
    total = duration.total_seconds()
    if total <= 0:
        return 0.0
    return max(0.0, min(1.0, position.total_seconds() / total))


def ellipsize(text: str, max_len: int) -> str:
    if max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return "." * max_len
    return text[: max_len - 3] + "..."


def visible_window(cursor: int, total: int, height: int) -> range:
    """Return the slice of rows to show so that ``cursor`` stays visible."""
    if total <= 0 or height <= 0:
        return range(0)
    if total <= height:
        return range(total)
    cursor = max(0, min(cursor, total - 1))
    start = max(0, min(cursor - height // 2, total - height))
    return range(start, start + height)
