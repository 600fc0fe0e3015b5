"""
Application coordinator owning the parking subsystem and its on/off switch.
"""

from __future__ import annotations

from typing import Hashable, List, Optional

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtWidgets import QApplication

from tab_parker import logger as app_logger
from tab_parker.activity import ActivitySink
from tab_parker.eviction import EvictionPolicy
from tab_parker.host import PARKABLE_TABS, HostError, TabHost, TabInfo
from tab_parker.idle_table import IdleTable
from tab_parker.indicator import TrayIndicator
from tab_parker.memory_host import InMemoryTabHost
from tab_parker.settings import ParkerSettingsManager
from tab_parker.sweep import MS_PER_SECOND, SweepScheduler

APP_NAME = "Tab Parker"
APP_VERSION = "1.0.0"
SETTINGS_REFRESH_INTERVAL_MS = 15000


class ParkerCoordinator(QObject):
    """
    Owns the idle table, the activity sink and the sweep timer, and moves
    them together between the enabled and disabled states.
    """

    enabledChanged = Signal(bool)

    def __init__(
        self,
        *,
        host: Optional[TabHost] = None,
        settings_manager: Optional[ParkerSettingsManager] = None,
        indicator: Optional[TrayIndicator] = None,
        ms_per_second: int = MS_PER_SECOND,
        settings_refresh_interval_ms: int = SETTINGS_REFRESH_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        self.host = host or InMemoryTabHost()
        self.settings_manager = settings_manager or ParkerSettingsManager()
        self.indicator = indicator or TrayIndicator(self)

        self.table = IdleTable()
        self.sink = ActivitySink(self.host, self.table)
        self.policy = EvictionPolicy(self.host, self.table)
        self.scheduler = SweepScheduler(
            self.host,
            self.policy,
            self.settings_manager,
            ms_per_second=ms_per_second,
            parent=self,
        )

        self._enabled = False
        self._epoch = 0
        self._manual_shutdown_requested = False

        self.indicator.toggleRequested.connect(self.toggle)
        self.indicator.exitRequested.connect(self.shutdown)

        self._settings_timer = QTimer(self)
        self._settings_timer.setInterval(settings_refresh_interval_ms)
        self._settings_timer.timeout.connect(self._reload_settings)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def manual_shutdown_requested(self) -> bool:
        return self._manual_shutdown_requested

    def start(self) -> None:
        self._logger.info("Starting {} v{}", APP_NAME, APP_VERSION)
        self.settings_manager.ready()
        self.indicator.show()
        self.set_enabled(self.settings_manager.read_active())
        self._settings_timer.start()

    def shutdown(self) -> None:
        self._logger.info("Shutting down application on user request.")
        self._manual_shutdown_requested = True
        self._settings_timer.stop()
        self._teardown()
        self.indicator.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    def toggle(self) -> None:
        self._logger.debug("Indicator toggle requested")
        self.set_enabled(not self._enabled)

    def set_enabled(self, active: bool, *, persist: bool = True) -> None:
        if persist:
            self.settings_manager.write_active(active)

        if active == self._enabled:
            self.indicator.set_active(active)
            return

        if active:
            self._bootstrap()
        else:
            self._teardown()
            self._logger.info("Tab parking disabled.")
        self.indicator.set_active(active)
        self.enabledChanged.emit(active)

    def _bootstrap(self) -> None:
        settings = self.settings_manager.read_settings()
        self._enabled = True
        self.sink.attach()

        epoch = self._epoch
        try:
            self.host.query_tabs(PARKABLE_TABS, lambda tabs, error: self._on_initial_tabs(epoch, tabs, error))
        except Exception as exc:  # host bindings may raise instead of reporting
            self._logger.error("Initial tab query failed: {}", exc)

        self.scheduler.start(settings.tick_seconds)
        self._logger.info(
            "Tab parking enabled (timeout={}s, tick={}s, skip pinned={}).",
            settings.timeout_seconds,
            settings.tick_seconds,
            settings.skip_pinned,
        )

    def _teardown(self) -> None:
        self.scheduler.stop()
        self.sink.detach()
        self.table.clear()
        self._epoch += 1
        self._enabled = False

    def _on_initial_tabs(self, epoch: int, tabs: List[TabInfo], error: Optional[HostError]) -> None:
        if epoch != self._epoch or not self._enabled:
            return
        if error is not None:
            self._logger.warning("Initial tab query error: {}", error)
            return
        try:
            for tab in tabs:
                self.table.upsert_zero(tab.tab_id)
        except Exception:
            self._logger.exception("Failed to seed idle table from initial tab query.")
            return
        self._logger.debug("Tracking {} tabs", len(tabs))

    def _reload_settings(self) -> None:
        if not self.settings_manager.available():
            self._logger.debug("Settings store unavailable; keeping active={}.", self._enabled)
            return
        active = self.settings_manager.read_active()
        if active != self._enabled:
            self._logger.info("Detected settings change. Applying active={}.", active)
            self.set_enabled(active, persist=False)

    def idle_seconds(self, tab_id: Hashable) -> Optional[int]:
        entry = self.table.get(tab_id)
        return entry.idle_seconds if entry is not None else None
