"""
Logging Configuration
Attaches handlers to the 'springfem' logger for command-line runs.

Library modules only call logging.getLogger(__name__); nothing below the
CLI adds handlers.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "springfem"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _handler(handler: logging.Handler, level: Union[int, str]) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route package log records to stderr and, optionally, a log file.

    Calling it again replaces the previous handlers, so repeated CLI runs in
    one process (tests) do not duplicate output.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Optional path; the file is overwritten on each run

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    # stdout carries the result report
    logger.addHandler(_handler(logging.StreamHandler(sys.stderr), level))
    if log_file:
        logger.addHandler(
            _handler(logging.FileHandler(log_file, mode='w', encoding='utf-8'), level)
        )

    logger.debug("Logging to stderr%s at level %s",
                 f" and {log_file}" if log_file else "", logging.getLevelName(logger.level))
    return logger
