"""
Entry point for the Tab Parker application.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Iterable, Optional, Tuple

from PySide6.QtCore import QDir, QLockFile
from PySide6.QtWidgets import QApplication

from tab_parker import logger as app_logger
from tab_parker.app import APP_NAME, ParkerCoordinator

_LOGGER = app_logger.get_logger()
_LOCK_PATH = Path(QDir.tempPath()) / "tab-parker.lock"


class _InstanceGuard:
    """Lock file guard to prevent concurrent instances."""

    def __init__(self, path: Path) -> None:
        self._lock = QLockFile(str(path))
        self._lock.setStaleLockTime(0)

    def acquire(self) -> bool:
        return self._lock.tryLock(0)

    def release(self) -> None:
        if self._lock.isLocked():
            self._lock.unlock()


def _run_application_once(argv: Iterable[str]) -> Tuple[int, bool]:
    """Start the Qt application once and report whether shutdown was intentional."""
    app = QApplication.instance() or QApplication(list(argv))
    app.setApplicationName(APP_NAME)
    app.setQuitOnLastWindowClosed(False)
    coordinator = ParkerCoordinator()
    coordinator.start()
    exit_code = app.exec()
    return exit_code, coordinator.manual_shutdown_requested


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Launch the application with single-instance + recovery safeguards."""
    args = list(argv) if argv is not None else sys.argv
    guard = _InstanceGuard(_LOCK_PATH)
    if not guard.acquire():
        _LOGGER.debug("Tab Parker instance already running; exiting silently.")
        return 0

    backoff_seconds = 2
    max_backoff = 30

    try:
        while True:
            try:
                exit_code, manual = _run_application_once(args)
            except Exception:  # pragma: no cover - crash guard
                _LOGGER.exception("Tab Parker crashed; attempting automatic recovery.")
                exit_code = 1
                manual = False

            if manual:
                return exit_code

            _LOGGER.warning(
                "Tab Parker exited unexpectedly (code={}). Restarting in {} seconds.",
                exit_code,
                backoff_seconds,
            )
            time.sleep(backoff_seconds)
            backoff_seconds = min(backoff_seconds * 2, max_backoff)
    finally:
        guard.release()


if __name__ == "__main__":
    raise SystemExit(main())
