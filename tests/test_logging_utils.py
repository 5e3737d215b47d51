"""Tests for logging setup."""

import logging
import os
from logging.handlers import RotatingFileHandler

import pytest

from audio_sequencer.logging_utils import setup_logging, get_logger, ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def _handler_types(logger):
    return sorted(type(h).__name__ for h in logger.handlers)


def test_development_console_only(tmp_path):
    logger = setup_logging("development", log_dir=str(tmp_path / "logs"), force=True)
    assert _handler_types(logger) == ["StreamHandler"]
    assert logger.level == logging.DEBUG
    assert not os.path.exists(tmp_path / "logs")


def test_testing_console_and_file(tmp_path):
    logger = setup_logging("testing", app_name="seq", log_dir=str(tmp_path / "logs"), force=True)
    assert _handler_types(logger) == ["RotatingFileHandler", "StreamHandler"]
    assert logger.level == logging.INFO
    assert os.path.exists(tmp_path / "logs" / "seq.log")


def test_production_file_only(tmp_path):
    logger = setup_logging("production", app_name="seq", log_dir=str(tmp_path / "logs"),
                           max_size_mb=2, max_files=3, force=True)
    [handler] = logger.handlers
    assert isinstance(handler, RotatingFileHandler)
    assert handler.maxBytes == 2 * 1024 * 1024
    assert handler.backupCount == 3


def test_file_format(tmp_path):
    setup_logging("production", app_name="seq", log_dir=str(tmp_path), force=True)
    get_logger("planner").warning("Invalid pause_duration for step 3: abc")
    for handler in logging.getLogger(ROOT_LOGGER).handlers:
        handler.flush()
    line = (tmp_path / "seq.log").read_text().strip()
    assert "[WARNING] audio_sequencer.planner: Invalid pause_duration for step 3: abc" in line


def test_get_logger_namespacing():
    assert get_logger("audio_sequencer.media").name == "audio_sequencer.media"
    assert get_logger("custom").name == "audio_sequencer.custom"
