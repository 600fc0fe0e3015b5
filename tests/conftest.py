"""Shared pytest fixtures."""

import os
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("TAB_PARKER_LOG_DIR", tempfile.mkdtemp(prefix="tab-parker-logs-"))

import pytest  # noqa: E402
from PySide6.QtCore import QSettings  # noqa: E402

from tab_parker.settings import ParkerSettingsManager  # noqa: E402


@pytest.fixture(autouse=True)
def _ensure_qapp(qapp):  # pragma: no cover - pytest-qt provides the fixture
    """Guarantee a running QApplication for widgets and timers."""

    return qapp


@pytest.fixture
def qsettings(tmp_path):
    return QSettings(str(tmp_path / "tab-parker.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def settings_manager(qsettings):
    return ParkerSettingsManager(qsettings=qsettings)


@pytest.fixture
def broken_settings_manager(tmp_path):
    """Settings manager whose INI path is a directory, so every write fails."""
    store_dir = tmp_path / "not-a-file.ini"
    store_dir.mkdir()
    return ParkerSettingsManager(qsettings=QSettings(str(store_dir), QSettings.Format.IniFormat))
