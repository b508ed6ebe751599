"""
Logging utilities for matrix path evaluation.

All modules log under the "mtv_path" logger; sub-loggers such as
"mtv_path.paths" inherit its handlers.
"""

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "mtv_path"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_logger: Optional[logging.Logger] = None


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Optional file to write logs to

    Returns:
        Configured logger
    """
    global _logger

    level = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers from an earlier setup
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the configured logger, creating default if needed.

    Args:
        name: Optional child name, e.g. "paths" for "mtv_path.paths"

    Returns:
        Logger instance
    """
    global _logger
    if _logger is None:
        _logger = setup_logging()
    if name:
        return _logger.getChild(name)
    return _logger
