"""
QSettings-backed configuration for the Tab Parker runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QSettings

from tab_parker import logger as app_logger

_LOGGER = app_logger.get_logger()

ORGANIZATION_NAME = "TabParker"
APPLICATION_NAME = "Tab Parker"

SETTING_ACTIVE = "active"
SETTING_TIMEOUT = "timeout"
SETTING_TICK = "tick"
SETTING_PINNED = "pinned"

DEFAULT_TIMEOUT_SECONDS = 15 * 60
DEFAULT_TICK_SECONDS = 60
_MIN_TICK = 1
_MAX_TICK = 3600
_MIN_TIMEOUT = 1
_MAX_TIMEOUT = 7 * 24 * 3600


@dataclass(frozen=True)
class ParkerSettings:
    active: bool = True
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    tick_seconds: int = DEFAULT_TICK_SECONDS
    skip_pinned: bool = True


class ParkerSettingsManager:
    """Loads persisted settings from QSettings and clamps invalid data."""

    def __init__(self, *, qsettings: Optional[QSettings] = None) -> None:
        self._settings = qsettings or QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

    def ready(self) -> None:
        """Flush pending writes and reload the backing store."""
        self._settings.sync()
        if not self.available():
            _LOGGER.warning(
                "Settings store {} is not readable ({}); defaults will be used.",
                self._settings.fileName(),
                self._settings.status(),
            )

    def available(self) -> bool:
        """Whether the backing store can currently be read and written."""
        return self._settings.status() == QSettings.Status.NoError

    def read_settings(self) -> ParkerSettings:
        if not self.available():
            return ParkerSettings()

        return ParkerSettings(
            active=self._read_bool(SETTING_ACTIVE, True),
            timeout_seconds=self._read_bounded(
                SETTING_TIMEOUT, DEFAULT_TIMEOUT_SECONDS, _MIN_TIMEOUT, _MAX_TIMEOUT
            ),
            tick_seconds=self._read_bounded(SETTING_TICK, DEFAULT_TICK_SECONDS, _MIN_TICK, _MAX_TICK),
            skip_pinned=self._read_bool(SETTING_PINNED, True),
        )

    def read_active(self) -> bool:
        return self.read_settings().active

    def write_active(self, active: bool) -> None:
        self._settings.setValue(SETTING_ACTIVE, bool(active))
        self._settings.sync()
        if not self.available():
            _LOGGER.error("Failed to persist {}={} to {}", SETTING_ACTIVE, active, self._settings.fileName())

    def write_values(self, *, timeout_seconds: Optional[int] = None, tick_seconds: Optional[int] = None,
                     skip_pinned: Optional[bool] = None) -> None:
        """Persist tuning values; unspecified ones keep their stored value."""
        if timeout_seconds is not None:
            self._settings.setValue(SETTING_TIMEOUT, int(timeout_seconds))
        if tick_seconds is not None:
            self._settings.setValue(SETTING_TICK, int(tick_seconds))
        if skip_pinned is not None:
            self._settings.setValue(SETTING_PINNED, bool(skip_pinned))
        self._settings.sync()

    def _read_bool(self, name: str, default: bool) -> bool:
        if not self._settings.contains(name):
            return default
        raw = self._settings.value(name, default)
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered in {"true", "1", "yes", "on"}:
                return True
            if lowered in {"false", "0", "no", "off"}:
                return False
        elif isinstance(raw, int):
            return bool(raw)
        _LOGGER.warning("Setting {} has unexpected value {!r}.", name, raw)
        return default

    def _read_bounded(self, name: str, default: int, minimum: int, maximum: int) -> int:
        if not self._settings.contains(name):
            return default
        raw = self._settings.value(name, default)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            _LOGGER.warning("Setting {} has unexpected value {!r}.", name, raw)
            return default
        if value < minimum or value > maximum:
            _LOGGER.warning(
                "Invalid {} value {} found in settings. Clamping to safe bounds.",
                name,
                value,
            )
        return max(minimum, min(maximum, value))
