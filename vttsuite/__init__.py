"""
WebVTT Subtitle Suite
=====================

Reading, writing and retiming of WebVTT subtitle files:
- Lossless parsing of cues, regions, style sheets and inline markup
- Canonical re-serialization with optional HLS X-TIMESTAMP-MAP correlation
- Fixed-delta timing synchronization

Usage:
    >>> from vttsuite import parse_webvtt, render_webvtt
    >>> document = parse_webvtt("WEBVTT\\n\\n00:01.000 --> 00:04.000\\nHello\\n")
    >>> render_webvtt(document)
    'WEBVTT\\n\\n1\\n00:00:01.000 --> 00:00:04.000\\nHello\\n'
"""

from .core import (
    Document,
    Cue,
    Line,
    LineItem,
    StyleAttributes,
    Style,
    Region,
    WebVTTTag,
    WebVTTError,
    TimeConverter,
    WebVTTReader,
    WebVTTWriter,
    read_webvtt,
    parse_webvtt,
    load_webvtt,
    render_webvtt,
    save_webvtt,
)
from .utils.constants import APP_VERSION

__version__ = APP_VERSION

__all__ = [
    'Document',
    'Cue',
    'Line',
    'LineItem',
    'StyleAttributes',
    'Style',
    'Region',
    'WebVTTTag',
    'WebVTTError',
    'TimeConverter',
    'WebVTTReader',
    'WebVTTWriter',
    'read_webvtt',
    'parse_webvtt',
    'load_webvtt',
    'render_webvtt',
    'save_webvtt',
]
