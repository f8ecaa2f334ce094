"""
Logging configuration for the WebVTT Subtitle Suite.

Every module logs through ``get_logger(__name__)``; since all module names
start with ``vttsuite``, configuring that one logger with setup_logging()
covers the whole package. Console output goes to stderr so command output
on stdout stays machine readable.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO
from .constants import DEFAULT_LOG_FORMAT, DEFAULT_LOG_DATE_FORMAT

ROOT_LOGGER_NAME = "vttsuite"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name with ANSI escapes."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy, other handlers receive the same record
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(colored.levelname)
        if color:
            colored.levelname = f"{color}{colored.levelname}{self.RESET}"
        return super().format(colored)


def supports_color(stream: TextIO) -> bool:
    """True if ANSI colors should be written to the stream (honours NO_COLOR)."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def level_from_flags(verbose: bool = False, debug: bool = False) -> int:
    """Map the CLI verbosity flags to a logging level."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    use_colors: bool = True,
    logger_name: str = ROOT_LOGGER_NAME,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure console and optional file logging.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO)
        log_file: Optional path of a log file, always written without colors
        use_colors: Whether to color console output when it is a terminal
        logger_name: Logger to configure
        stream: Console stream, defaults to stderr

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging(logging.DEBUG, Path("vttsuite.log"))
        >>> logger.info("Application started")
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(level)
    formatter_class = ColoredFormatter if use_colors and supports_color(console.stream) else logging.Formatter
    console.setFormatter(formatter_class(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT))
    logger.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Note:
        Nothing is printed until setup_logging() has configured the
        ``vttsuite`` logger (or the application configured logging itself).
    """
    return logging.getLogger(name)


def set_log_level(logger: logging.Logger, level: int) -> None:
    """Set the level of a logger and of all its handlers."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
