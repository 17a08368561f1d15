"""
Hyperband Reader Logging Configuration

Logging is silent by default. Call setup_logging() to see pipeline progress
(container opened, band sliced, extent resolved) on stdout or in a file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = 'hyperband_reader'
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _coerce_level(level: Union[int, str], fallback: int) -> int:
    """Translate 'debug'/'INFO'/... into a logging constant."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for Hyperband Reader.

    Args:
        level: Logging level, as a string or logging constant
        log_file: Optional path to a log file (parent folders are created)
        format_string: Custom format string for log messages
        date_format: Custom date format string

    Returns:
        logging.Logger: The configured package logger

    Examples:
        >>> from hyperband_reader import setup_logging
        >>> setup_logging('DEBUG')
        >>> setup_logging(log_file='/tmp/hyperband.log')
    """
    level = _coerce_level(level, logging.INFO)
    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    # Re-running setup must not stack duplicate handlers
    logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file:
        logger.info("Logging to file: %s", log_file)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a child of the package logger.

    Args:
        name: Dotted module path below the package, e.g. 'io.container'

    Returns:
        logging.Logger: Logger named 'hyperband_reader.<name>'
    """
    return logging.getLogger(f'{PACKAGE_LOGGER}.{name}')


def set_log_level(level: Union[int, str]) -> None:
    """
    Change the level of the package logger and all of its handlers.

    Examples:
        >>> from hyperband_reader import set_log_level
        >>> set_log_level('ERROR')
    """
    level = _coerce_level(level, logging.WARNING)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


# Warnings and errors only, and nowhere, until setup_logging() is called
_default_logger = logging.getLogger(PACKAGE_LOGGER)
if not _default_logger.handlers:
    _default_logger.addHandler(logging.NullHandler())
_default_logger.setLevel(logging.WARNING)
