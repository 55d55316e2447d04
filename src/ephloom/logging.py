"""
Logging configuration for the ephloom package.

Every module obtains its logger through get_logger(__name__) so that
formatting and level control stay consistent across the package.
"""

import logging
import os
import sys

# Debug messages are suppressed by default
DEFAULT_LOG_LEVEL = logging.WARNING

LOG_LEVEL_ENV_VAR = "EPHLOOM_LOG_LEVEL"
PACKAGE_LOGGER = "ephloom"

FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_logger(name: str) -> logging.Logger:
    """
    Logger for an ephloom module, writing to stdout.

    The level comes from the "ephloom" logger once set_log_level has run,
    otherwise from EPHLOOM_LOG_LEVEL.

    Args:
        name: Usually the calling module's __name__

    Returns:
        The logger, with its handler attached on first use
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    package_level = logging.getLogger(PACKAGE_LOGGER).level
    logger.setLevel(package_level if package_level != logging.NOTSET else _get_log_level())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(FORMATTER)
    logger.addHandler(handler)
    # Already printed by our handler
    logger.propagate = False
    return logger


def _get_log_level() -> int:
    """Level named by EPHLOOM_LOG_LEVEL, or WARNING if unset or unknown."""
    return _LEVELS.get(os.environ.get(LOG_LEVEL_ENV_VAR, "").upper(), DEFAULT_LOG_LEVEL)


def set_log_level(level: int) -> None:
    """
    Apply a level to the package logger and every module logger under it.

    Args:
        level: A logging level such as logging.INFO
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    # Module loggers carry their own level from get_logger
    prefix = PACKAGE_LOGGER + "."
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)
