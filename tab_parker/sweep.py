"""
Periodic sweep timer.
"""

from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from tab_parker import logger as app_logger
from tab_parker.eviction import EvictionPolicy
from tab_parker.host import PARKABLE_TABS, HostError, TabHost, TabInfo
from tab_parker.settings import ParkerSettings, ParkerSettingsManager

MS_PER_SECOND = 1000


class SweepScheduler(QObject):
    """
    Single-shot timer that re-arms itself on every firing.

    The next firing is armed before the host is queried, so a slow host
    never delays the schedule. Stopping bumps a generation counter; query
    results that arrive for an older generation are dropped, which makes
    ``stop()`` a firm cancellation even with a query still in flight.
    """

    sweepFinished = Signal(object)

    def __init__(
        self,
        host: TabHost,
        policy: EvictionPolicy,
        settings_manager: ParkerSettingsManager,
        *,
        ms_per_second: int = MS_PER_SECOND,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._host = host
        self._policy = policy
        self._settings_manager = settings_manager
        self._ms_per_second = ms_per_second
        self._generation = 0
        self._running = False
        self._logger = app_logger.get_logger()

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)  # type: ignore[arg-type]

    @property
    def running(self) -> bool:
        return self._running

    def start(self, tick_seconds: int) -> None:
        """Arm the first firing ``tick_seconds`` from now."""
        if self._running:
            return
        self._running = True
        self._arm(tick_seconds)

    def stop(self) -> None:
        if not self._running:
            return
        self._timer.stop()
        self._running = False
        self._generation += 1

    def remaining_ms(self) -> int:
        return self._timer.remainingTime() if self._running else -1

    def _arm(self, tick_seconds: int) -> None:
        self._timer.start(max(1, tick_seconds) * self._ms_per_second)

    def _on_timeout(self) -> None:
        if not self._running:
            return
        self._logger.debug("tick")
        settings = self._settings_manager.read_settings()
        self._arm(settings.tick_seconds)

        generation = self._generation
        try:
            self._host.query_tabs(
                PARKABLE_TABS,
                lambda tabs, error: self._on_tabs(generation, settings, tabs, error),
            )
        except Exception as exc:  # host bindings may raise instead of reporting
            self._logger.error("Tab query failed: {}", exc)

    def _on_tabs(
        self,
        generation: int,
        settings: ParkerSettings,
        tabs: List[TabInfo],
        error: Optional[HostError],
    ) -> None:
        if generation != self._generation or not self._running:
            self._logger.debug("Dropping tab query result from a cancelled sweep.")
            return
        if error is not None:
            self._logger.warning("Tab query error; skipping this sweep: {}", error)
            return
        try:
            report = self._policy.sweep(tabs, settings)
        except Exception:
            self._logger.exception("Sweep over {} tabs failed.", len(tabs))
            return
        self.sweepFinished.emit(report)
