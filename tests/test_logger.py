"""Logger configuration."""

from tab_parker import logger as app_logger


def test_console_level_defaults_to_info():
    assert app_logger.console_level({}) == "INFO"


def test_console_level_reads_environment():
    assert app_logger.console_level({"TAB_PARKER_LOG_LEVEL": " debug "}) == "DEBUG"
    assert app_logger.console_level({"TAB_PARKER_LOG_LEVEL": "warning"}) == "WARNING"


def test_unknown_console_level_falls_back_to_info():
    assert app_logger.console_level({"TAB_PARKER_LOG_LEVEL": "chatty"}) == "INFO"


def test_get_logger_is_configured_once(tmp_path):
    first = app_logger.get_logger()
    app_logger.configure(tmp_path / "ignored.log")
    assert app_logger.get_logger() is first
    assert not (tmp_path / "ignored.log").exists()
