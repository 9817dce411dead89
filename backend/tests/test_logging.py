"""Tests for the application logger setup."""

import logging

import pytest

from archaeolog.utils.logging import APP_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def app_logger():
    logger = logging.getLogger(APP_LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestSetupLogging:
    def test_level_name_is_applied(self, app_logger):
        assert setup_logging("debug") is app_logger
        assert app_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, app_logger):
        setup_logging("chatty")
        assert app_logger.level == logging.INFO

    def test_handler_added_once(self, app_logger):
        setup_logging("INFO")
        setup_logging("WARNING")
        named = [h for h in app_logger.handlers if h.get_name() == "archaeolog-stdout"]
        assert len(named) == 1
        assert app_logger.level == logging.WARNING

    def test_access_log_not_below_info(self, app_logger):
        setup_logging("DEBUG")
        assert logging.getLogger("uvicorn.access").level == logging.INFO


class TestGetLogger:
    def test_default_is_app_logger(self):
        assert get_logger().name == APP_LOGGER_NAME

    def test_module_loggers_are_children(self):
        assert get_logger("archaeolog.core.services").parent.name.startswith(APP_LOGGER_NAME)
