"""Configuration persistence for ncm-tui."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

MIN_TICK_INTERVAL = 0.02
MAX_TICK_INTERVAL = 1.0


def _default_libraries() -> tuple[str, ...]:
    return (str(Path.home() / "Music"),)


@dataclass(frozen=True)
class AppConfig:
    """Immutable user configuration loaded from disk."""

    library_paths: tuple[str, ...] = field(default_factory=_default_libraries)
    recursive: bool = True
    session_library: Optional[str] = None
    volume: int = 100
    tick_interval: float = 0.1


def get_config_dir(app_name: str = "ncm-tui") -> Path:
    """Return the per-user config directory for the current platform."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Roaming"
        return _ensure_dir(root / app_name)
    if os.name == "posix" and _is_macos():
        return _ensure_dir(Path.home() / "Library" / "Application Support" / app_name)
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return _ensure_dir(root / app_name)


def get_config_path() -> Path:
    return get_config_dir() / "config.json"


def load_config() -> AppConfig:
    """Load configuration from disk, falling back to defaults on error."""
    path = get_config_path()
    if not path.exists():
        return AppConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.exception("Failed to load config from %s", path)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config with unexpected shape at %s", path)
        return AppConfig()
    return _config_from_mapping(raw)


def save_config(cfg: AppConfig) -> None:
    """Persist configuration to disk atomically."""
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(".tmp")
    data = {
        "library_paths": list(cfg.library_paths),
        "recursive": cfg.recursive,
        "session_library": cfg.session_library,
        "volume": cfg.volume,
        "tick_interval": cfg.tick_interval,
    }
    temp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    os.replace(temp_path, path)


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _is_macos() -> bool:
    return os.uname().sysname == "Darwin" if hasattr(os, "uname") else False


def _get_bool(raw: dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    return value if isinstance(value, bool) else default


def _get_int(
    raw: dict[str, Any], key: str, default: int, *, min_value: int, max_value: int
) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        value = default
    return max(min_value, min(max_value, value))


def _get_float(
    raw: dict[str, Any],
    key: str,
    default: float,
    *,
    min_value: float,
    max_value: float,
) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        value = default
    return max(min_value, min(max_value, float(value)))


def _get_paths(raw: dict[str, Any], key: str) -> tuple[str, ...]:
    value = raw.get(key)
    if not isinstance(value, list):
        return _default_libraries()
    paths = tuple(item for item in value if isinstance(item, str) and item)
    return paths or _default_libraries()


def _config_from_mapping(raw: dict[str, Any]) -> AppConfig:
    """Normalize raw JSON data into an AppConfig."""
    session = raw.get("session_library")
    if not isinstance(session, str) or not session:
        session = None
    return AppConfig(
        library_paths=_get_paths(raw, "library_paths"),
        recursive=_get_bool(raw, "recursive", True),
        session_library=session,
        volume=_get_int(raw, "volume", 100, min_value=0, max_value=100),
        tick_interval=_get_float(
            raw,
            "tick_interval",
            0.1,
            min_value=MIN_TICK_INTERVAL,
            max_value=MAX_TICK_INTERVAL,
        ),
    )
