"""
Time conversion and manipulation utilities for WebVTT processing.

This module provides functions for:
- Parsing and formatting WebVTT timestamps (HH:MM:SS.mmm)
- Reading and writing the HLS X-TIMESTAMP-MAP correlation header
- Parsing user supplied offsets and formatting durations for display
"""

import re
from datetime import timedelta
from vttsuite.core.errors import MalformedCorrelationHeader, MalformedTimestamp
from vttsuite.utils.constants import MPEGTS_CLOCK_RATE, TIMESTAMP_MAP_HEADER
from vttsuite.utils.logging_config import get_logger

logger = get_logger(__name__)

_TIMESTAMP_PATTERN = re.compile(r'^(?:(\d{2,}):)?(\d{2}):(\d{2})\.(\d{3})$', re.ASCII)

# Microseconds per MPEG-TS tick is 100/9, keep the arithmetic in integers
_MICROSECONDS_PER_SECOND = 1_000_000


class TimeConverter:
    """Handles WebVTT time format conversions and manipulations."""

    @staticmethod
    def parse_timestamp(time_str: str) -> timedelta:
        """
        Parse a WebVTT timestamp.

        Args:
            time_str: Timestamp as ``HH:MM:SS.mmm`` or ``MM:SS.mmm``

        Returns:
            Parsed duration

        Raises:
            MalformedTimestamp: If a field is not numeric, has the wrong width
                or is out of range

        Example:
            >>> TimeConverter.parse_timestamp("01:02.500")
            datetime.timedelta(seconds=62, microseconds=500000)
        """
        match = _TIMESTAMP_PATTERN.match(time_str.strip())
        if not match:
            raise MalformedTimestamp(f"Invalid timestamp: {time_str!r}")

        hours, minutes, seconds, milliseconds = match.groups()
        if int(minutes) > 59 or int(seconds) > 59:
            raise MalformedTimestamp(f"Timestamp field out of range: {time_str!r}")

        return timedelta(
            hours=int(hours or 0),
            minutes=int(minutes),
            seconds=int(seconds),
            milliseconds=int(milliseconds)
        )

    @staticmethod
    def format_timestamp(value: timedelta) -> str:
        """
        Format a duration as a WebVTT timestamp.

        Hours are always written, negative durations clamp to zero.

        Example:
            >>> TimeConverter.format_timestamp(timedelta(seconds=3825.678))
            '01:03:45.678'
        """
        total_ms = TimeConverter.to_milliseconds(value)
        if total_ms < 0:
            total_ms = 0

        ms = total_ms % 1000
        total_s = total_ms // 1000
        s = total_s % 60
        m = (total_s // 60) % 60
        h = total_s // 3600
        return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"

    @staticmethod
    def to_microseconds(value: timedelta) -> int:
        """Convert a duration to whole microseconds without going through floats."""
        return (value.days * 86400 + value.seconds) * _MICROSECONDS_PER_SECOND + value.microseconds

    @staticmethod
    def to_milliseconds(value: timedelta) -> int:
        """Convert a duration to whole milliseconds, rounding half up."""
        return (TimeConverter.to_microseconds(value) + 500) // 1000

    @staticmethod
    def parse_timestamp_map(line: str) -> timedelta:
        """
        Compute the offset carried by an X-TIMESTAMP-MAP header.

        The header correlates a cue timestamp (LOCAL) with a 90 kHz MPEG-TS
        timestamp (MPEGTS). The returned offset is ``MPEGTS / 90000 - LOCAL``;
        a key that is absent counts as zero.

        Args:
            line: Header line, e.g. ``X-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:900000``

        Returns:
            Offset to add to cue times

        Raises:
            MalformedCorrelationHeader: If ``=`` or a ``:`` is missing, or a
                value cannot be parsed

        Example:
            >>> TimeConverter.parse_timestamp_map(
            ...     "X-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:180000")
            datetime.timedelta(seconds=2)
        """
        parts = line.split('=')
        if len(parts) <= 1:
            raise MalformedCorrelationHeader(f"Invalid {TIMESTAMP_MAP_HEADER}, no '=' found")
        right = parts[1]

        local = timedelta(0)
        mpegts = 0
        for field in right.split(','):
            key_value = field.split(':', 1)
            if len(key_value) <= 1:
                raise MalformedCorrelationHeader(
                    f"Invalid {TIMESTAMP_MAP_HEADER}, part {field!r} didn't contain ':'")

            key, value = key_value[0].strip().lower(), key_value[1]
            if key == 'local':
                try:
                    local = TimeConverter.parse_timestamp(value)
                except MalformedTimestamp as e:
                    raise MalformedCorrelationHeader(
                        f"Invalid {TIMESTAMP_MAP_HEADER} LOCAL value: {e}") from e
            elif key == 'mpegts':
                try:
                    mpegts = int(value.strip())
                except ValueError as e:
                    raise MalformedCorrelationHeader(
                        f"Invalid {TIMESTAMP_MAP_HEADER} MPEGTS value: {value!r}") from e

        media_time = timedelta(microseconds=mpegts * _MICROSECONDS_PER_SECOND // MPEGTS_CLOCK_RATE)
        logger.debug(f"{TIMESTAMP_MAP_HEADER}: MPEGTS {mpegts} ({media_time}) against LOCAL {local}")
        return media_time - local

    @staticmethod
    def format_timestamp_map(offset: timedelta) -> str:
        """
        Build an X-TIMESTAMP-MAP header for an offset against a zero local time.

        Example:
            >>> TimeConverter.format_timestamp_map(timedelta(seconds=10))
            'X-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:900000'
        """
        scaled = TimeConverter.to_microseconds(offset) * MPEGTS_CLOCK_RATE
        # Truncate toward zero for negative offsets too
        ticks = scaled // _MICROSECONDS_PER_SECOND if scaled >= 0 else -(-scaled // _MICROSECONDS_PER_SECOND)
        return f"{TIMESTAMP_MAP_HEADER}=LOCAL:{TimeConverter.format_timestamp(timedelta(0))},MPEGTS:{ticks}"

    @staticmethod
    def parse_offset(offset_str: str) -> timedelta:
        """
        Parse a user supplied offset.

        Args:
            offset_str: Offset string (e.g., "2.5s", "-1500ms", "00:00:02.500",
                "-00:01.000", plain integers as milliseconds, decimals as seconds)

        Returns:
            Offset as a duration, negative values move cues earlier

        Raises:
            ValueError: If offset string format is invalid
        """
        text = offset_str.strip()
        sign = 1
        if text.startswith(('-', '+')):
            sign = -1 if text[0] == '-' else 1
            text = text[1:].strip()

        try:
            if ':' in text:
                return sign * TimeConverter.parse_timestamp(text)
            lowered = text.lower()
            if lowered.endswith('ms'):
                return timedelta(milliseconds=sign * int(lowered[:-2]))
            if lowered.endswith('s'):
                return timedelta(seconds=sign * float(lowered[:-1]))
            if lowered.isdigit():
                return timedelta(milliseconds=sign * int(lowered))
            return timedelta(seconds=sign * float(lowered))
        except ValueError as e:
            raise ValueError(f"Invalid offset format: {offset_str}. "
                             f"Supported formats: '1500ms', '2.5s', '00:00:02.500', "
                             f"or plain numbers") from e

    @staticmethod
    def format_duration(seconds: float) -> str:
        """
        Format duration in seconds to human-readable string.

        Example:
            >>> TimeConverter.format_duration(3825.5)
            '1h 3m 45.5s'
        """
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            remaining_seconds = seconds % 60
            return f"{minutes}m {remaining_seconds:.1f}s"
        else:
            hours = int(seconds // 3600)
            remaining_seconds = seconds % 3600
            minutes = int(remaining_seconds // 60)
            remaining_seconds = remaining_seconds % 60
            return f"{hours}h {minutes}m {remaining_seconds:.1f}s"


parse_timestamp = TimeConverter.parse_timestamp
format_timestamp = TimeConverter.format_timestamp
parse_timestamp_map = TimeConverter.parse_timestamp_map
format_timestamp_map = TimeConverter.format_timestamp_map
