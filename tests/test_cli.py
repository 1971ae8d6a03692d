"""Tests for CLI parsing and startup wiring."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import sys
import threading
from typing import Any

import pytest

from ncm_tui import cli
from ncm_tui.config import AppConfig


@dataclass
class DummyPlayer:
    volume: int | None = None
    stopped: int = 0

    def set_volume(self, volume: int) -> None:
        self.volume = volume

    def stop(self) -> None:
        self.stopped += 1


@pytest.fixture
def startup(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Stub out logging, VLC, config and the TUI; record what main hands over."""
    seen: dict[str, Any] = {"saved": []}
    player = DummyPlayer()
    seen["player"] = player
    seen["config"] = AppConfig(library_paths=("/music",), volume=55, tick_interval=0.5)

    def fake_run_tui(client, player, libraries, tick_interval) -> int:
        seen["client"] = client
        seen["libraries"] = libraries
        seen["tick"] = tick_interval
        return 0

    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    monkeypatch.setattr(cli, "VlcPlayer", lambda: player)
    monkeypatch.setattr(cli, "init_logging", lambda: Path("app.log"))
    monkeypatch.setattr(cli, "enable_faulthandler", lambda _: Path("hangdump.log"))
    monkeypatch.setattr(cli, "load_config", lambda: seen["config"])
    monkeypatch.setattr(cli, "save_config", seen["saved"].append)
    monkeypatch.setattr(cli, "_run_tui", fake_run_tui)
    return seen


def test_parse_defaults() -> None:
    args = cli.build_parser().parse_args([])
    assert args.library == []
    assert args.tick is None


def test_parse_repeated_library_and_tick() -> None:
    args = cli.build_parser().parse_args(
        ["--library", "/a", "--library", "/b", "--tick", "0.2"]
    )
    assert args.library == ["/a", "/b"]
    assert args.tick == 0.2


def test_merge_libraries_keeps_first_occurrence() -> None:
    assert cli.merge_libraries(["/b", "/a"], ["/a", "/c", ""]) == ["/b", "/a", "/c"]


def test_clamp_tick() -> None:
    assert cli.clamp_tick(0.0) == 0.02
    assert cli.clamp_tick(5.0) == 1.0
    assert cli.clamp_tick(0.3) == 0.3


def test_main_wires_config_into_tui(startup: dict[str, Any]) -> None:
    assert cli.main(["--library", "/extra"]) == 0
    assert startup["libraries"] == ["/extra", "/music"]
    assert startup["tick"] == 0.5
    assert startup["player"].volume == 55
    assert startup["client"].is_login() is False


def test_main_tick_override(startup: dict[str, Any]) -> None:
    cli.main(["--tick", "9"])
    assert startup["tick"] == 1.0


def test_main_forgets_unrestorable_session(
    startup: dict[str, Any], tmp_path: Path
) -> None:
    startup["config"] = AppConfig(session_library=str(tmp_path / "gone"))
    assert cli.main([]) == 0
    assert startup["client"].is_login() is False
    assert [cfg.session_library for cfg in startup["saved"]] == [None]


def test_main_handles_vlc_error(monkeypatch, capsys) -> None:
    def boom():
        raise RuntimeError("missing")

    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    monkeypatch.setattr(cli, "VlcPlayer", boom)
    monkeypatch.setattr(cli, "init_logging", lambda: Path("app.log"))
    monkeypatch.setattr(cli, "enable_faulthandler", lambda _: Path("hangdump.log"))
    monkeypatch.setattr(cli, "load_config", AppConfig)
    assert cli.main([]) == 1
    assert "missing" in capsys.readouterr().err


def test_excepthook_dumps_threads(startup: dict[str, Any], monkeypatch) -> None:
    labels: list[str] = []
    monkeypatch.setattr(cli, "dump_threads", labels.append)
    cli.main([])
    try:
        raise ValueError("boom")
    except ValueError as exc:
        sys.excepthook(ValueError, exc, exc.__traceback__)
    assert labels == ["uncaught exception"]


def test_persist_session_updates_config(monkeypatch) -> None:
    saved: list[AppConfig] = []
    monkeypatch.setattr(cli, "load_config", lambda: AppConfig(volume=10))
    monkeypatch.setattr(cli, "save_config", saved.append)
    cli.persist_session("/music")
    assert saved == [AppConfig(volume=10, session_library="/music")]


def test_persist_session_logs_write_errors(monkeypatch) -> None:
    def boom(_cfg: AppConfig) -> None:
        raise OSError("read-only")

    monkeypatch.setattr(cli, "load_config", AppConfig)
    monkeypatch.setattr(cli, "save_config", boom)
    cli.persist_session(None)
