"""
Utility modules.

This package contains shared utility functions and configurations:
- File I/O operations and backup utilities
- Logging configuration
- Shared constants and configurations
"""

from .file_operations import FileHandler
from .logging_config import setup_logging, get_logger, set_log_level, level_from_flags
from .constants import (
    WEBVTT_HEADER,
    WEBVTT_TIME_BOUNDARIES_SEPARATOR,
    WEBVTT_DEFAULT_STYLE_ID,
    TIMESTAMP_MAP_HEADER,
    MPEGTS_CLOCK_RATE,
    SUBTITLE_EXTENSIONS,
    ENCODING_PRIORITY,
    UTF8_BOM,
    BACKUP_DIR_NAME,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_DATE_FORMAT,
    APP_NAME,
    APP_VERSION,
    APP_DESCRIPTION,
)

__all__ = [
    'FileHandler',
    'setup_logging',
    'get_logger',
    'set_log_level',
    'level_from_flags',
    'WEBVTT_HEADER',
    'WEBVTT_TIME_BOUNDARIES_SEPARATOR',
    'WEBVTT_DEFAULT_STYLE_ID',
    'TIMESTAMP_MAP_HEADER',
    'MPEGTS_CLOCK_RATE',
    'SUBTITLE_EXTENSIONS',
    'ENCODING_PRIORITY',
    'UTF8_BOM',
    'BACKUP_DIR_NAME',
    'DEFAULT_LOG_FORMAT',
    'DEFAULT_LOG_DATE_FORMAT',
    'APP_NAME',
    'APP_VERSION',
    'APP_DESCRIPTION',
]
