"""
Shared constants and configurations for the WebVTT processing application.

This module contains all the constants used across different modules including:
- WebVTT block keywords and separators
- Timestamp correlation (HLS) settings
- Encoding detection priorities
- Default configuration values
"""

from typing import List, Set

# ============================================================================
# WEBVTT FORMAT CONSTANTS
# ============================================================================

# File signature, must be the first token of the first significant line
WEBVTT_HEADER: str = "WEBVTT"

# Block prefixes
WEBVTT_COMMENT_PREFIX: str = "NOTE "
WEBVTT_REGION_PREFIX: str = "Region: "
WEBVTT_STYLE_PREFIX: str = "STYLE"

# Separator between cue start and end timestamps
WEBVTT_TIME_BOUNDARIES_SEPARATOR: str = " --> "

# Style id holding the declarations of a top-level STYLE block
WEBVTT_DEFAULT_STYLE_ID: str = "vttsuite-webvtt-default-style-id"

# Voice tag name (<v Speaker>)
WEBVTT_VOICE_TAG: str = "v"

# Class tag name used for colors (<c.yellow>)
WEBVTT_CLASS_TAG: str = "c"

# Supported subtitle file extensions
SUBTITLE_EXTENSIONS: Set[str] = {'.vtt', '.webvtt'}

# ============================================================================
# TIMESTAMP CORRELATION CONSTANTS
# ============================================================================

# HLS header mapping the cue clock onto the MPEG-TS clock (RFC 8216 3.5)
TIMESTAMP_MAP_HEADER: str = "X-TIMESTAMP-MAP"

# MPEG-TS presentation clock frequency (ticks per second)
MPEGTS_CLOCK_RATE: int = 90000

# ============================================================================
# ENCODING DETECTION CONSTANTS
# ============================================================================

# Encodings to try, in order, when automatic detection gives no answer
ENCODING_PRIORITY: List[str] = [
    'utf-8', 'utf-16', 'cp1252', 'latin-1'
]

# UTF-8 BOM marker
UTF8_BOM: bytes = b"\xef\xbb\xbf"

# BOM as decoded character, may prefix the first line of a stream
BOM_CHARACTER: str = "\ufeff"

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================

# Default backup directory name
BACKUP_DIR_NAME: str = "subtitle_backups"

# Default log format
DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "WebVTT Subtitle Suite"
APP_VERSION: str = "1.0.0"
APP_DESCRIPTION: str = """
A tool for processing WebVTT subtitle files with support for:
- Lossless parsing of cues, regions, style sheets and inline markup
- Canonical re-serialization with optional HLS timestamp correlation
- Fixed-delta timing synchronization
"""
