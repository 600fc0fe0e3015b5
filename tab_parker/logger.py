"""
Logging setup for Tab Parker.

Console output defaults to INFO and can be raised or lowered with
``TAB_PARKER_LOG_LEVEL``; the file sink always keeps DEBUG detail so a
missed parking can be traced after the fact.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger as _logger

_LOG_INITIALISED = False
_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
LOG_DIR = Path(
    os.environ.get(
        "TAB_PARKER_LOG_DIR",
        str(Path.home() / ".local" / "state" / "tab-parker"),
    )
)
DEFAULT_LOG_PATH = LOG_DIR / "tab-parker.log"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}"


def console_level(environ: Optional[Mapping[str, str]] = None) -> str:
    """Console level from ``TAB_PARKER_LOG_LEVEL``; unknown names fall back to INFO."""
    env = os.environ if environ is None else environ
    level = env.get("TAB_PARKER_LOG_LEVEL", "INFO").strip().upper()
    return level if level in _LEVELS else "INFO"


def configure(log_path: Optional[Path] = None) -> None:
    """Install the console and rotating file sinks once per process."""
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or DEFAULT_LOG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level=console_level(), format=LOG_FORMAT, enqueue=True)
    _logger.add(
        target,
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
