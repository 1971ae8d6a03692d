"""Stack dumps for a controller loop that stopped making progress."""

from __future__ import annotations

import faulthandler
import logging
import threading
import time
from pathlib import Path
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)

_HANG_FILE: Optional[TextIO] = None
_LOCK = threading.Lock()


def enable_faulthandler(log_path: Path) -> Path:
    """Route faulthandler output to ``hangdump.log`` beside the app log."""
    global _HANG_FILE
    hang_path = log_path.parent / "hangdump.log"
    try:
        hang_path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(hang_path, "a", encoding="utf-8")
    except OSError:
        logger.warning("Cannot open %s; stack dumps disabled", hang_path)
        return hang_path
    with _LOCK:
        _HANG_FILE = handle
    faulthandler.enable(file=handle, all_threads=True)
    return hang_path


def dump_threads(label: str) -> None:
    """Write a labelled stack dump of every thread to the hang file."""
    handle = _HANG_FILE
    if handle is None:
        return
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    try:
        handle.write(f"\n[{stamp}] {label}\n")
        handle.flush()
        faulthandler.dump_traceback(file=handle, all_threads=True)
        handle.flush()
    except (OSError, ValueError):
        logger.warning("Stack dump failed (%s)", label)


class LoopWatchdog:
    """Dumps stacks when the loop has not beaten for ``threshold_seconds``.

    The loop calls ``beat(stage)`` as it enters each stage of an iteration,
    so a dump names the stage that is blocked (e.g. waiting on a collaborator).
    """

    def __init__(
        self,
        *,
        threshold_seconds: float = 15.0,
        repeat_seconds: float = 30.0,
        poll_seconds: float = 1.0,
        now: Callable[[], float] = time.monotonic,
        dump: Callable[[str], None] = dump_threads,
    ) -> None:
        self._threshold_seconds = threshold_seconds
        self._repeat_seconds = repeat_seconds
        self._poll_seconds = poll_seconds
        self._now = now
        self._dump = dump
        self._last_beat = now()
        self._stage = "idle"
        self._last_dump: Optional[float] = None
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="LoopWatchdog", daemon=True
        )

    @property
    def stage(self) -> str:
        return self._stage

    def beat(self, stage: str) -> None:
        self._last_beat = self._now()
        self._stage = stage

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()

    def check(self) -> bool:
        """Dump once per ``repeat_seconds`` while stalled; True when dumped."""
        now = self._now()
        if now - self._last_beat <= self._threshold_seconds:
            return False
        if self._last_dump is not None and now - self._last_dump <= self._repeat_seconds:
            return False
        self._last_dump = now
        stalled_for = now - self._last_beat
        logger.warning("Loop stalled for %.1fs in %s", stalled_for, self._stage)
        self._dump(f"loop stalled in {self._stage} for {stalled_for:.1f}s")
        return True

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.check()
            self._stop_event.wait(self._poll_seconds)
