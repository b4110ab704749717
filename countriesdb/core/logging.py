"""
CountriesDB Logging Configuration

Every module of the client logs through a child of the "countriesdb"
logger. The package attaches a NullHandler to it at import, so nothing
is printed until the application calls setup_logging() or configures
logging itself.
"""
import logging
import sys
from typing import Optional, Union

from countriesdb.core.config import ENV_LOG_LEVEL, config
from countriesdb.core.exceptions import ConfigurationError

LOGGER_NAME = "countriesdb"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def install_null_handler() -> logging.Logger:
    """Attach a NullHandler to the package logger, once."""
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def resolve_log_level(level: Union[int, str]) -> int:
    """
    Convert a level name ("debug", "WARNING", ...) or number to a logging level.

    Raises:
        ConfigurationError: If the name is not a known logging level
    """
    if isinstance(level, int):
        return level

    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(
            f"Unknown log level: {level!r}",
            details={"value": level},
            config_key=ENV_LOG_LEVEL,
        )
    return numeric


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None,
    console: bool = True,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Send the client's log records to stderr and/or a file.

    Args:
        level: Log level name or number
               Defaults to COUNTRIESDB_LOG_LEVEL env var or WARNING
        log_file: Optional path of a log file to append to
        console: Whether to output to stderr (default: True)
        format_string: Custom format string

    Returns:
        The "countriesdb" logger

    Raises:
        ConfigurationError: If the level is not a known logging level

    Examples:
        >>> # Show every request the validator sends
        >>> setup_logging(level="DEBUG")
    """
    numeric_level = resolve_log_level(level if level is not None else config.log_level)

    logger = install_null_handler()
    logger.setLevel(numeric_level)

    # Replace handlers from an earlier call, keep the NullHandler
    for handler in [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
