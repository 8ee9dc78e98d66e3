"""Tests for logging configuration."""

import logging

import pytest

from aurora_forecast.logging_config import THIRD_PARTY_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def restore_loggers():
    """Put the root and third-party loggers back the way pytest left them."""
    names = [None, *THIRD_PARTY_LOGGERS]
    saved = {
        name: (logging.getLogger(name).handlers[:], logging.getLogger(name).level, logging.getLogger(name).propagate)
        for name in names
    }
    yield
    for name, (handlers, level, propagate) in saved.items():
        logger = logging.getLogger(name)
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate


def test_single_root_handler():
    configure_logging()
    configure_logging()

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.INFO


def test_third_party_loggers_do_not_propagate():
    configure_logging(logging.DEBUG)

    for name in THIRD_PARTY_LOGGERS:
        logger = logging.getLogger(name)
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
