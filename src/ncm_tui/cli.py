"""Command-line interface for ncm-tui."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
import logging
import sys
import threading
from typing import Iterable, Optional, Sequence, Tuple
from types import TracebackType

from ncm_tui.api import LocalLibraryClient
from ncm_tui.config import (
    MAX_TICK_INTERVAL,
    MIN_TICK_INTERVAL,
    load_config,
    save_config,
)
from ncm_tui.hangwatch import dump_threads, enable_faulthandler
from ncm_tui.logging_setup import init_logging
from ncm_tui.player_vlc import VlcPlayer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="ncm-tui", description="Terminal music player"
    )
    parser.add_argument(
        "--library",
        action="append",
        default=[],
        metavar="PATH",
        help="Music library (folder, audio file or .m3u) to offer on the login "
        "screen; may be repeated",
    )
    parser.add_argument(
        "--tick",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Refresh interval of the main loop",
    )
    return parser


def merge_libraries(first: Sequence[str], second: Sequence[str]) -> list[str]:
    """Concatenate two path lists, keeping the first occurrence of each path."""
    merged: list[str] = []
    for path in (*first, *second):
        if path and path not in merged:
            merged.append(path)
    return merged


def clamp_tick(value: float) -> float:
    return max(MIN_TICK_INTERVAL, min(MAX_TICK_INTERVAL, value))


def persist_session(library: Optional[str]) -> None:
    """Remember the signed-in library so the next start can restore it."""
    try:
        save_config(replace(load_config(), session_library=library))
    except OSError:
        logger.exception("Failed to save session")


def _install_excepthooks() -> None:
    def excepthook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: Optional[TracebackType],
    ) -> None:
        logger.exception("Uncaught exception", exc_info=(exc_type, exc, tb))
        dump_threads("uncaught exception")

    sys.excepthook = excepthook

    def thread_hook(args: threading.ExceptHookArgs) -> None:
        exc_value = args.exc_value or RuntimeError("unknown")
        exc_info: Tuple[type[BaseException], BaseException, Optional[TracebackType]] = (
            args.exc_type,
            exc_value,
            args.exc_traceback,
        )
        thread_name = args.thread.name if args.thread else "thread"
        logger.exception("Thread exception in %s", thread_name, exc_info=exc_info)

    threading.excepthook = thread_hook


def _run_tui(
    client: LocalLibraryClient,
    player: VlcPlayer,
    libraries: Sequence[str],
    tick_interval: float,
) -> int:
    from ncm_tui.tui import run_tui

    return run_tui(client, player, libraries=libraries, tick_interval=tick_interval)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the CLI."""
    log_path = init_logging()
    enable_faulthandler(log_path)
    logger.info("App start")
    _install_excepthooks()

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    config = load_config()
    libraries = merge_libraries(args.library, config.library_paths)
    tick_interval = clamp_tick(
        args.tick if args.tick is not None else config.tick_interval
    )

    try:
        player = VlcPlayer()
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    player.set_volume(config.volume)

    client = LocalLibraryClient(
        recursive=config.recursive, on_session_change=persist_session
    )
    if config.session_library:
        asyncio.run(client.restore_session(config.session_library))

    exit_code = _run_tui(client, player, libraries, tick_interval)
    logger.info("App exit code=%s", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
