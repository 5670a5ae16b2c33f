"""Tests for logging setup."""

import logging

from sect_economy.core.logging import PACKAGE_LOGGER, get_logger, setup_logging


def test_level_applies_to_package_loggers():
    setup_logging("debug")
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
    assert get_logger("sect_economy.services.quest_service").isEnabledFor(logging.DEBUG)
    setup_logging("INFO")


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty")
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO
