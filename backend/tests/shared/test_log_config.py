"""Tests for shared/log_config.py."""

import logging

import pytest

from shared.log_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_sets_level_from_name(self, restore_root_logger):
        setup_logging("debug")
        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging("chatty")
        assert restore_root_logger.level == logging.INFO

    def test_repeated_setup_does_not_stack_handlers(self, restore_root_logger):
        setup_logging("INFO")
        count = len(restore_root_logger.handlers)
        setup_logging("WARNING")
        assert len(restore_root_logger.handlers) == count

    def test_quietens_httpx(self, restore_root_logger):
        setup_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
