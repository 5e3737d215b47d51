"""Logging setup: console and/or rotating file handlers chosen by environment."""

import logging
import os
from logging.handlers import RotatingFileHandler

from audio_sequencer.constants import (
    DEFAULT_APP_ENV,
    DEFAULT_APP_NAME,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_MAX_SIZE_MB,
    DEFAULT_LOG_MAX_FILES,
)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "audio_sequencer"

_CONFIGURED = False


def setup_logging(
    app_env: str = DEFAULT_APP_ENV,
    app_name: str = DEFAULT_APP_NAME,
    log_dir: str = DEFAULT_LOG_DIR,
    max_size_mb: int = DEFAULT_LOG_MAX_SIZE_MB,
    max_files: int = DEFAULT_LOG_MAX_FILES,
    force: bool = False,
) -> logging.Logger:
    """Configure the package logger once.

    development: console only, DEBUG level.
    testing:     console and rotating file, INFO level.
    production:  rotating file only, INFO level.

    Returns the configured package logger.
    """
    global _CONFIGURED
    logger = logging.getLogger(ROOT_LOGGER)
    if _CONFIGURED and not force:
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = logging.DEBUG if app_env == "development" else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = []
    if app_env in ("development", "testing"):
        handlers.append(logging.StreamHandler())
    if app_env in ("testing", "production"):
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(
            os.path.join(log_dir, f"{app_name}.log"),
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=max_files,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.setLevel(level)
    _CONFIGURED = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
