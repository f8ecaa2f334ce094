"""
WebVTT reader.

Reads WebVTT text line by line into a Document. The reader is a small state
machine over the kind of block being read (comment, region, style sheet or
cue text); each input line goes through a single transition method.
"""

import io
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional
from vttsuite.core.encoding_detection import EncodingDetector
from vttsuite.core.errors import (
    CorrelationHeaderAfterCues,
    MalformedInlineStyle,
    MalformedRegionDeclaration,
    UnknownRegion,
    WebVTTError,
)
from vttsuite.core.markup import parse_line
from vttsuite.core.models import Cue, Document, Region, Style, StyleAttributes
from vttsuite.core.timing_utils import TimeConverter
from vttsuite.utils.constants import (
    BOM_CHARACTER,
    TIMESTAMP_MAP_HEADER,
    WEBVTT_COMMENT_PREFIX,
    WEBVTT_DEFAULT_STYLE_ID,
    WEBVTT_HEADER,
    WEBVTT_REGION_PREFIX,
    WEBVTT_STYLE_PREFIX,
    WEBVTT_TIME_BOUNDARIES_SEPARATOR,
)
from vttsuite.utils.logging_config import get_logger

logger = get_logger(__name__)

# Cue settings stored on the cue's inline style
_CUE_SETTINGS = ('align', 'line', 'position', 'size', 'vertical')

# Region settings stored on the region's inline style, by keyword
_REGION_SETTINGS = {
    'regionanchor': 'region_anchor',
    'scroll': 'scroll',
    'viewportanchor': 'viewport_anchor',
    'width': 'width',
}


class BlockKind(Enum):
    """Kind of block the current line belongs to."""
    NONE = "none"
    COMMENT = "comment"
    REGION = "region"
    STYLE = "style"
    TEXT = "text"


class WebVTTReader:
    """
    Parses WebVTT content into a Document.

    A reader instance holds the state of one parse; read() resets it, so an
    instance can be reused sequentially but not shared between threads.
    """

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self.document = Document()
        self.block = BlockKind.NONE
        self.comments: List[str] = []
        self.cue: Optional[Cue] = None
        self.cue_index = 0
        self.style_sheet: Optional[Style] = None
        self.time_offset = timedelta(0)
        self.line_number = 0

    def read(self, lines: Iterable[str]) -> Document:
        """
        Parse WebVTT lines.

        Args:
            lines: Input lines, with or without line terminators (a text file
                object works)

        Returns:
            Parsed Document; cue times include any positive X-TIMESTAMP-MAP offset

        Raises:
            WebVTTError: On the first malformed block, with its line number
        """
        self._reset()
        iterator = iter(lines)

        if not self._skip_header(iterator):
            logger.warning(f"No {WEBVTT_HEADER} header found, returning an empty document")
            return self.document

        for raw_line in iterator:
            self.line_number += 1
            try:
                self._transition(raw_line.strip())
            except WebVTTError as e:
                if e.line_number is not None:
                    raise
                raise e.at_line(self.line_number) from e

        if self.time_offset > timedelta(0):
            logger.debug(f"Applying {TIMESTAMP_MAP_HEADER} offset of {self.time_offset}")
            self.document.add(self.time_offset)

        logger.debug(f"Read {len(self.document.cues)} cues, {len(self.document.regions)} regions, "
                     f"{len(self.document.styles)} styles")
        return self.document

    def _skip_header(self, iterator) -> bool:
        for raw_line in iterator:
            self.line_number += 1
            line = raw_line
            if self.line_number == 1:
                line = line.lstrip(BOM_CHARACTER)
            fields = line.split()
            if fields and fields[0] == WEBVTT_HEADER:
                return True
        return False

    def _transition(self, line: str) -> None:
        """Apply one trimmed input line to the parser state."""
        if line.startswith(WEBVTT_COMMENT_PREFIX):
            self.block = BlockKind.COMMENT
            self.comments.append(line[len(WEBVTT_COMMENT_PREFIX):])

        elif not line:
            if not self._inside_style_declaration():
                self.block = BlockKind.NONE

        elif line.startswith(WEBVTT_REGION_PREFIX):
            self.block = BlockKind.REGION
            self._read_region(line[len(WEBVTT_REGION_PREFIX):])

        elif line.startswith(WEBVTT_STYLE_PREFIX):
            self.block = BlockKind.STYLE
            if WEBVTT_DEFAULT_STYLE_ID not in self.document.styles:
                self.document.styles[WEBVTT_DEFAULT_STYLE_ID] = Style(id=WEBVTT_DEFAULT_STYLE_ID)
            self.style_sheet = self.document.styles[WEBVTT_DEFAULT_STYLE_ID]

        elif WEBVTT_TIME_BOUNDARIES_SEPARATOR in line:
            self.block = BlockKind.TEXT
            self._read_timing(line)

        elif line.startswith(TIMESTAMP_MAP_HEADER):
            if any(cue.lines for cue in self.document.cues):
                raise CorrelationHeaderAfterCues(
                    f"Found {TIMESTAMP_MAP_HEADER} after processing cue text")
            self.time_offset = TimeConverter.parse_timestamp_map(line)

        elif self.block == BlockKind.COMMENT:
            self.comments.append(line)

        elif self.block == BlockKind.STYLE:
            self.style_sheet.declarations.append(line)

        elif self.block == BlockKind.TEXT:
            parsed = parse_line(line)
            if parsed.items:
                self.cue.lines.append(parsed)

        else:
            # Outside any block: cue identifier, only numeric ids are kept
            try:
                self.cue_index = int(line)
            except ValueError:
                logger.debug(f"line {self.line_number}: ignoring non-numeric cue id {line!r}")

    def _inside_style_declaration(self) -> bool:
        """True while a style sheet's last declaration has not been closed by '}'."""
        if self.block != BlockKind.STYLE or self.style_sheet is None:
            return False
        declarations = self.style_sheet.declarations
        return bool(declarations) and not declarations[-1].endswith('}')

    def _read_region(self, settings: str) -> None:
        region = Region(id="", inline_style=StyleAttributes())

        for part in settings.split():
            key_value = part.split('=')
            if len(key_value) <= 1:
                raise MalformedRegionDeclaration(f"Invalid region setting {part!r}")

            key, value = key_value[0], key_value[1]
            if key == 'id':
                region.id = value
            elif key == 'lines':
                try:
                    region.inline_style.lines = int(value)
                except ValueError as e:
                    raise MalformedRegionDeclaration(f"Invalid region lines {value!r}") from e
            elif key in _REGION_SETTINGS:
                setattr(region.inline_style, _REGION_SETTINGS[key], value)

        region.inline_style.propagate()
        self.document.regions[region.id] = region

    def _read_timing(self, line: str) -> None:
        left = line.split(WEBVTT_TIME_BOUNDARIES_SEPARATOR)
        right = left[1].split()

        cue = Cue(
            start=TimeConverter.parse_timestamp(left[0]),
            end=TimeConverter.parse_timestamp(right[0] if right else ""),
            comments=self.comments,
            index=self.cue_index,
            inline_style=StyleAttributes()
        )

        for setting in right[1:]:
            if not setting:
                continue

            key_value = setting.split(':')
            if len(key_value) <= 1:
                raise MalformedInlineStyle(f"Invalid cue setting {setting!r}")

            key, value = key_value[0], key_value[1]
            if key in _CUE_SETTINGS:
                setattr(cue.inline_style, key, value)
            elif key == 'region':
                if value not in self.document.regions:
                    raise UnknownRegion(f"Unknown region {value}")
                cue.region = value

        cue.inline_style.propagate()

        self.cue_index = 0
        self.comments = []
        self.cue = cue
        self.document.cues.append(cue)

    def parse_text(self, text: str) -> Document:
        """Parse WebVTT content held in a string."""
        return self.read(io.StringIO(text))

    def parse_file(self, file_path: Path) -> Document:
        """
        Parse a WebVTT file.

        Args:
            file_path: Path to the VTT file

        Returns:
            Parsed Document

        Raises:
            IOError: If file cannot be read
            WebVTTError: If the content is malformed
        """
        try:
            content, encoding = EncodingDetector.read_file_with_encoding(file_path)
            logger.debug(f"Read {file_path.name} with encoding: {encoding}")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise IOError(f"Cannot read VTT file {file_path}: {e}") from e

        try:
            document = self.parse_text(content)
        except WebVTTError as e:
            logger.error(f"Failed to parse {file_path.name}: {e}")
            raise

        logger.info(f"Parsed {len(document.cues)} cues from VTT file: {file_path.name}")
        return document


def read_webvtt(stream: Iterable[str]) -> Document:
    """Parse WebVTT lines from a stream."""
    return WebVTTReader().read(stream)


def parse_webvtt(text: str) -> Document:
    """Parse WebVTT content held in a string."""
    return WebVTTReader().parse_text(text)


def load_webvtt(file_path: Path) -> Document:
    """Parse a WebVTT file from disk."""
    return WebVTTReader().parse_file(Path(file_path))
