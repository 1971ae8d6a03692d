"""Root logging for ncm-tui: a rotating file log plus a stderr handler."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
LOG_FILE_NAME = "app.log"
LEVEL_ENV = "NCM_TUI_LOG_LEVEL"

logger = logging.getLogger(__name__)


def _default_log_dir() -> Path:
    local_appdata = os.getenv("LOCALAPPDATA")
    if local_appdata:
        return Path(local_appdata) / "NcmTui" / "logs"
    return Path.home() / ".ncm_tui" / "logs"


def _level_from_env() -> int:
    level = logging.getLevelName(os.getenv(LEVEL_ENV, "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _is_console_handler(handler: logging.Handler) -> bool:
    # FileHandler subclasses StreamHandler.
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )


def _missing_handlers(
    root: logging.Logger, log_path: Path
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        handlers.append(
            RotatingFileHandler(
                log_path, maxBytes=2_000_000, backupCount=5, encoding="utf-8"
            )
        )
    if not any(_is_console_handler(h) for h in root.handlers):
        handlers.append(logging.StreamHandler())
    return handlers


def init_logging(log_dir: Optional[Path] = None) -> Path:
    """Configure the root logger once and return the log file path.

    Calling it again only adds handlers that are missing. When the log
    directory cannot be created, logging falls back to ``basicConfig``.
    """
    directory = log_dir or _default_log_dir()
    log_path = directory / LOG_FILE_NAME
    level = _level_from_env()
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        for handler in _missing_handlers(root, log_path):
            handler.setLevel(level)
            handler.setFormatter(formatter)
            root.addHandler(handler)
    except OSError:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.info("Logging to %s at %s", log_path, logging.getLevelName(level))
    return log_path


def set_console_level(level: int) -> None:
    """Change only the stderr handlers; the file log keeps its level."""
    for handler in logging.getLogger().handlers:
        if _is_console_handler(handler):
            handler.setLevel(level)
