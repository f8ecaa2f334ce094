"""
WebVTT writer.

Serializes a Document to canonical WebVTT text: header (optionally with an
X-TIMESTAMP-MAP correlation), style sheet, regions sorted by id, then cues
numbered from 1.
"""

from datetime import timedelta
from pathlib import Path
from typing import List, TextIO
from vttsuite.core.markup import render_line
from vttsuite.core.models import Cue, Document, Region
from vttsuite.core.timing_utils import TimeConverter
from vttsuite.utils.constants import (
    WEBVTT_COMMENT_PREFIX,
    WEBVTT_HEADER,
    WEBVTT_REGION_PREFIX,
    WEBVTT_STYLE_PREFIX,
    WEBVTT_TIME_BOUNDARIES_SEPARATOR,
)
from vttsuite.utils.file_operations import FileHandler
from vttsuite.utils.logging_config import get_logger

logger = get_logger(__name__)

# Region settings in output order: (keyword, StyleAttributes field)
_REGION_SETTINGS = (
    ('lines', 'lines'),
    ('regionanchor', 'region_anchor'),
    ('scroll', 'scroll'),
    ('viewportanchor', 'viewport_anchor'),
    ('width', 'width'),
)

# Cue settings in output order; 'region' is read from the cue itself
_CUE_SETTINGS = ('align', 'line', 'position', 'region', 'size', 'vertical')


class WebVTTWriter:
    """Serializes Documents to WebVTT."""

    def render(self, document: Document, offset: timedelta = timedelta(0)) -> str:
        """
        Render a document as WebVTT text.

        Args:
            document: Document to serialize
            offset: When non-zero, an X-TIMESTAMP-MAP header mapping local
                time zero to this MPEG-TS time is written

        Returns:
            WebVTT text, without a trailing line break
        """
        parts: List[str] = [WEBVTT_HEADER, "\n"]
        if offset:
            parts.append(TimeConverter.format_timestamp_map(offset) + "\n")
        parts.append("\n")

        declarations = [
            declaration
            for style in document.styles.values()
            for declaration in style.declarations
        ]
        if declarations:
            parts.append(f"{WEBVTT_STYLE_PREFIX}\n" + "\n".join(declarations) + "\n\n")

        for region_id in sorted(document.regions):
            parts.append(self._render_region(document, document.regions[region_id]) + "\n")
        if document.regions:
            parts.append("\n")

        for number, cue in enumerate(document.cues, start=1):
            parts.append(self._render_cue(document, cue, number))

        content = "".join(parts)
        return content[:-1] if content.endswith("\n") else content

    def _render_region(self, document: Document, region: Region) -> str:
        text = f"{WEBVTT_REGION_PREFIX}id={region.id}"
        for keyword, attribute in _REGION_SETTINGS:
            value = document.region_attribute(region, attribute)
            if value:
                text += f" {keyword}={value}"
        return text

    def _render_cue(self, document: Document, cue: Cue, number: int) -> str:
        parts = []
        if cue.comments:
            parts.append(WEBVTT_COMMENT_PREFIX + "\n".join(cue.comments) + "\n\n")

        timing = (f"{number}\n"
                  f"{TimeConverter.format_timestamp(cue.start)}"
                  f"{WEBVTT_TIME_BOUNDARIES_SEPARATOR}"
                  f"{TimeConverter.format_timestamp(cue.end)}")
        for setting in _CUE_SETTINGS:
            if setting == 'region':
                value = cue.region
            else:
                value = document.cue_attribute(cue, setting)
            if value:
                timing += f" {setting}:{value}"
        parts.append(timing + "\n")

        for line in cue.lines:
            parts.append(render_line(line) + "\n")
        parts.append("\n")

        return "".join(parts)

    def write(self, document: Document, stream: TextIO, offset: timedelta = timedelta(0)) -> None:
        """
        Write a document to an open text stream.

        Raises:
            IOError: If the stream rejects the write, naming the stream
        """
        content = self.render(document, offset)
        try:
            stream.write(content)
        except OSError as e:
            destination = getattr(stream, 'name', repr(stream))
            logger.error(f"Failed to write VTT content to {destination}: {e}")
            raise IOError(f"Cannot write VTT content to {destination}: {e}") from e

    def write_file(self, document: Document, output_path: Path,
                   offset: timedelta = timedelta(0), create_backup: bool = False) -> None:
        """
        Write a document to a VTT file.

        Args:
            document: Document to serialize
            output_path: Output file path
            offset: X-TIMESTAMP-MAP offset, see render()
            create_backup: Whether to back up an existing file first

        Raises:
            IOError: If file cannot be written
        """
        try:
            FileHandler.safe_write(output_path, self.render(document, offset),
                                   encoding='utf-8', create_backup=create_backup)
        except OSError as e:
            raise IOError(f"Cannot write VTT file {output_path}: {e}") from e
        logger.info(f"Created VTT file: {output_path}")


def render_webvtt(document: Document, offset: timedelta = timedelta(0)) -> str:
    """Render a document as WebVTT text."""
    return WebVTTWriter().render(document, offset)


def save_webvtt(document: Document, output_path: Path, offset: timedelta = timedelta(0)) -> None:
    """Write a document to a VTT file."""
    WebVTTWriter().write_file(document, Path(output_path), offset)
