"""
Timing adjustment processor for WebVTT files.

This module provides functionality for shifting cue timing by a fixed offset
or moving the first cue to start at a specific timestamp.
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional
from vttsuite.core.errors import WebVTTError
from vttsuite.core.timing_utils import TimeConverter
from vttsuite.core.vtt_reader import WebVTTReader
from vttsuite.core.vtt_writer import WebVTTWriter
from vttsuite.utils.file_operations import FileHandler
from vttsuite.utils.logging_config import get_logger

logger = get_logger(__name__)


class TimingAdjuster:
    """Handles timing adjustments for WebVTT files."""

    def __init__(self, create_backup: bool = True):
        """
        Initialize the timing adjuster.

        Args:
            create_backup: Whether to create backup files before overwriting
        """
        self.create_backup = create_backup
        self.reader = WebVTTReader()
        self.writer = WebVTTWriter()

    def adjust_by_offset(self, input_path: Path, offset: timedelta,
                         output_path: Optional[Path] = None) -> bool:
        """
        Shift every cue of a file by a fixed offset.

        Cues moved entirely to or before zero are dropped and a negative
        start time is clamped to zero.

        Args:
            input_path: Path to input VTT file
            offset: Shift to apply (positive = delay, negative = advance)
            output_path: Path for output file (if None, overwrites input)

        Returns:
            True if adjustment was successful

        Example:
            >>> adjuster = TimingAdjuster()
            >>> success = adjuster.adjust_by_offset(Path("episode.vtt"), timedelta(seconds=-2.47))
        """
        target_path = output_path or input_path
        try:
            document = self.reader.parse_file(input_path)
            logger.info(f"Loaded {len(document.cues)} cues from {input_path.name}")

            if self.create_backup and target_path == input_path:
                FileHandler.create_backup(input_path)

            cue_count = len(document.cues)
            document.add(offset)

            dropped = cue_count - len(document.cues)
            if dropped:
                logger.warning(f"Dropped {dropped} cues shifted before 00:00:00.000")

            self.writer.write_file(document, target_path)

        except (OSError, WebVTTError) as e:
            logger.error(f"Failed to adjust timing by offset: {e}")
            return False

        offset_ms = TimeConverter.to_milliseconds(offset)
        offset_direction = "delayed" if offset_ms > 0 else "advanced"
        logger.info(f"Successfully {offset_direction} {len(document.cues)} cues by "
                    f"{abs(offset_ms)}ms in {target_path.name}")
        return True

    def adjust_first_cue_to(self, input_path: Path, target_timestamp: str,
                            output_path: Optional[Path] = None) -> bool:
        """
        Shift a file so its first cue starts at the given timestamp.

        Args:
            input_path: Path to input VTT file
            target_timestamp: Start time for the first cue (e.g., "00:00:50.983")
            output_path: Path for output file (if None, overwrites input)

        Returns:
            True if adjustment was successful

        Example:
            >>> adjuster = TimingAdjuster()
            >>> success = adjuster.adjust_first_cue_to(Path("episode.vtt"), "00:00:50.983")
        """
        try:
            target_start = TimeConverter.parse_timestamp(target_timestamp)
            document = self.reader.parse_file(input_path)
        except (OSError, WebVTTError) as e:
            logger.error(f"Failed to adjust first cue timing: {e}")
            return False

        if not document.cues:
            logger.error("No cues found in file")
            return False

        current_start = document.cues[0].start
        offset = target_start - current_start

        logger.info(f"First cue currently starts at {TimeConverter.format_timestamp(current_start)}")
        logger.info(f"Target start time: {TimeConverter.format_timestamp(target_start)}")
        logger.info(f"Calculated offset: {TimeConverter.to_milliseconds(offset)}ms")

        return self.adjust_by_offset(input_path, offset, output_path)

    def parse_offset_string(self, offset_str: str) -> timedelta:
        """
        Parse offset string to a duration.

        Args:
            offset_str: Offset string (e.g., "2.5s", "-1500ms", "00:00:02.500")

        Returns:
            Offset as a duration

        Raises:
            ValueError: If offset string format is invalid
        """
        return TimeConverter.parse_offset(offset_str)
