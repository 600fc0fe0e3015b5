"""
System tray indicator showing whether parking is enabled.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QCoreApplication, QObject, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

APP_NAME = "Tab Parker"

STATE_ACTIVE = "active"
STATE_INACTIVE = "inactive"

_ICONS = {
    STATE_ACTIVE: QStyle.StandardPixmap.SP_DialogApplyButton,
    STATE_INACTIVE: QStyle.StandardPixmap.SP_DialogCancelButton,
}


def state_title(state: str) -> str:
    """Translated tooltip for an indicator state."""
    if state == STATE_ACTIVE:
        return QCoreApplication.translate("TrayIndicator", "Tab Parker is active. Click to disable.")
    return QCoreApplication.translate("TrayIndicator", "Tab Parker is inactive. Click to enable.")


class TrayIndicator(QObject):
    toggleRequested = Signal()
    exitRequested = Signal()

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._state: Optional[str] = None

        self._tray = QSystemTrayIcon(self)
        self._tray.setToolTip(APP_NAME)
        self._tray.activated.connect(self._on_activated)

        self._menu = QMenu()
        self._toggle_action = QAction(QCoreApplication.translate("TrayIndicator", "Enable parking"), self._menu)
        self._toggle_action.setCheckable(True)
        exit_action = QAction(QCoreApplication.translate("TrayIndicator", "Exit"), self._menu)
        self._menu.addAction(self._toggle_action)
        self._menu.addSeparator()
        self._menu.addAction(exit_action)
        self._tray.setContextMenu(self._menu)

        self._toggle_action.triggered.connect(lambda _checked=False: self.toggleRequested.emit())
        exit_action.triggered.connect(lambda _checked=False: self.exitRequested.emit())

    @property
    def state(self) -> Optional[str]:
        return self._state

    @property
    def title(self) -> str:
        return self._tray.toolTip()

    def show(self) -> None:
        if QSystemTrayIcon.isSystemTrayAvailable() and not self._tray.isVisible():
            self._tray.show()

    def hide(self) -> None:
        if self._tray.isVisible():
            self._tray.hide()

    def set_active(self, active: bool) -> None:
        state = STATE_ACTIVE if active else STATE_INACTIVE
        self._state = state
        self._tray.setIcon(QApplication.style().standardIcon(_ICONS[state]))
        self._tray.setToolTip(state_title(state))
        self._toggle_action.setChecked(active)

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.toggleRequested.emit()
