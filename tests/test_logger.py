import logging

import cardmatch.utils.logger as logger_module
from cardmatch.config import Settings
from cardmatch.utils.logger import setup_logger


def test_level_comes_from_settings(monkeypatch):
    monkeypatch.setattr(logger_module, "get_settings", lambda: Settings(log_level="debug"))

    logger = setup_logger("cardmatch.tests.settings_level")

    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setattr(logger_module, "get_settings", lambda: Settings(log_level="DEBUG"))

    logger = setup_logger("cardmatch.tests.explicit_level", level="WARNING")

    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.setattr(logger_module, "get_settings", lambda: Settings(log_level="LOUD"))
    assert setup_logger("cardmatch.tests.unknown_level").level == logging.INFO


def test_settings_read_log_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert Settings.from_env().log_level == "WARNING"
