# Tests for logging_setup.py
# Created: 2026-10-19

import logging

import pytest
from rich.logging import RichHandler

import showdir.logging_setup as logging_setup


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    configured = logging_setup._configured
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging_setup._configured = configured


class TestSetupLogging:
    def test_installs_one_rich_handler(self):
        logging_setup._configured = False
        logging_setup.setup_logging("DEBUG")
        logging_setup.setup_logging("DEBUG")
        rich_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        logging_setup.setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_access_log_quieted(self):
        logging_setup.setup_logging("DEBUG")
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
