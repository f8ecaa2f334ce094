"""
Core WebVTT processing modules.

This package contains the fundamental components for WebVTT processing:
- Document model (cues, lines, styles, regions)
- Timestamp and X-TIMESTAMP-MAP codec
- Inline markup tokenizer and renderer
- Reader and writer
- Encoding detection for input files
"""

from .errors import (
    WebVTTError,
    MalformedTimestamp,
    MalformedCorrelationHeader,
    MalformedRegionDeclaration,
    UnknownRegion,
    MalformedInlineStyle,
    CorrelationHeaderAfterCues,
)
from .models import (
    Document,
    Cue,
    Line,
    LineItem,
    StyleAttributes,
    Style,
    Region,
    WebVTTTag,
    first_present,
)
from .timing_utils import TimeConverter
from .markup import parse_line, render_line, escape_text, unescape_text
from .encoding_detection import EncodingDetector
from .vtt_reader import WebVTTReader, read_webvtt, parse_webvtt, load_webvtt
from .vtt_writer import WebVTTWriter, render_webvtt, save_webvtt

__all__ = [
    'WebVTTError',
    'MalformedTimestamp',
    'MalformedCorrelationHeader',
    'MalformedRegionDeclaration',
    'UnknownRegion',
    'MalformedInlineStyle',
    'CorrelationHeaderAfterCues',
    'Document',
    'Cue',
    'Line',
    'LineItem',
    'StyleAttributes',
    'Style',
    'Region',
    'WebVTTTag',
    'first_present',
    'TimeConverter',
    'parse_line',
    'render_line',
    'escape_text',
    'unescape_text',
    'EncodingDetector',
    'WebVTTReader',
    'read_webvtt',
    'parse_webvtt',
    'load_webvtt',
    'WebVTTWriter',
    'render_webvtt',
    'save_webvtt',
]
