"""
Inline markup handling for WebVTT cue text.

This module provides:
- Tokenization of a cue text line into styled text runs
- Rendering of styled text runs back to markup
- Escaping and unescaping of the four WebVTT character references
"""

import re
from datetime import timedelta
from typing import Iterator, List, Optional, Tuple
from vttsuite.core.errors import MalformedTimestamp
from vttsuite.core.models import Line, LineItem, StyleAttributes, WebVTTTag
from vttsuite.core.tables import ESCAPE_TABLE, HEX_TO_COLOR_NAME, UNESCAPE_TABLE
from vttsuite.core.timing_utils import TimeConverter
from vttsuite.utils.constants import WEBVTT_CLASS_TAG, WEBVTT_VOICE_TAG
from vttsuite.utils.logging_config import get_logger

logger = get_logger(__name__)

# A start or end tag begins with '<' or '</' followed by a letter; anything
# else ('<00:00:01.000>', a stray '<') belongs to the surrounding text
_TAG_TOKEN = re.compile(r'</?[A-Za-z][^>]*>')

# Name, dot separated classes and annotation of a tag
_TAG_PARTS = re.compile(r'</*\s*([^\.\s]+)(\.[^\s/]*)*\s*([^/]*)\s*/*>')

_INLINE_TIMESTAMP = re.compile(r'<((?:\d{2,}:)?\d{2}:\d{2}\.\d{3})>', re.ASCII)

_ESCAPE_PATTERN = re.compile('|'.join(re.escape(k) for k in ESCAPE_TABLE))
_UNESCAPE_PATTERN = re.compile(
    '|'.join(re.escape(k) for k in sorted(UNESCAPE_TABLE, key=len, reverse=True))
)

_TEXT, _START_TAG, _END_TAG = 'text', 'start', 'end'


def escape_text(text: str) -> str:
    """Replace ``& < >`` and non-breaking spaces with character references."""
    return _ESCAPE_PATTERN.sub(lambda m: ESCAPE_TABLE[m.group(0)], text)


def unescape_text(text: str) -> str:
    """Reverse escape_text(), in a single pass."""
    return _UNESCAPE_PATTERN.sub(lambda m: UNESCAPE_TABLE[m.group(0)], text)


def _tokenize(text: str) -> Iterator[Tuple[str, str]]:
    position = 0
    for match in _TAG_TOKEN.finditer(text):
        if match.start() > position:
            yield _TEXT, text[position:match.start()]
        raw = match.group(0)
        yield (_END_TAG if raw.startswith('</') else _START_TAG), raw
        position = match.end()
    if position < len(text):
        yield _TEXT, text[position:]


def parse_tag(raw: str) -> Optional[WebVTTTag]:
    """
    Parse a raw start tag.

    Args:
        raw: Tag text, e.g. ``<c.yellow.bg>`` or ``<v Bob>``

    Returns:
        WebVTTTag, or None if the text is not a tag
    """
    match = _TAG_PARTS.match(raw)
    if not match:
        return None

    name, classes, annotation = match.groups()
    return WebVTTTag(
        name=name,
        classes=classes.strip('.').split('.') if classes else [],
        annotation=annotation.strip() or None
    )


def _split_inline_timestamps(raw: str, style: Optional[StyleAttributes]) -> List[LineItem]:
    matches = list(_INLINE_TIMESTAMP.finditer(raw))

    items = []
    head = (raw[:matches[0].start()] if matches else raw).strip()
    if head:
        items.append(LineItem(text=unescape_text(head), inline_style=style))

    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(raw)
        segment = raw[match.end():end].strip()
        if not segment:
            continue

        try:
            start_at = TimeConverter.parse_timestamp(match.group(1))
        except MalformedTimestamp as e:
            logger.warning(f"Ignoring inline timestamp {match.group(1)!r}: {e}")
            start_at = timedelta(0)

        items.append(LineItem(text=unescape_text(segment), start_at=start_at, inline_style=style))

    return items


def parse_line(text: str) -> Line:
    """
    Parse one line of cue text.

    Open tags are kept on a stack; every text run records a copy of the stack
    as its style. The first voice tag names the line's speaker and is not
    stacked. Extra closing tags are ignored.

    Args:
        text: Raw cue text line

    Returns:
        Line holding the voice name and the non-blank text runs

    Example:
        >>> line = parse_line("<v Bob>Hello <b>world</b>")
        >>> line.voice_name, [item.text for item in line.items]
        ('Bob', ['Hello', 'world'])
    """
    line = Line()
    stack: List[WebVTTTag] = []

    for kind, raw in _tokenize(text):
        if kind == _END_TAG:
            if stack:
                stack.pop()

        elif kind == _START_TAG:
            tag = parse_tag(raw)
            if tag is None:
                continue

            if tag.name == WEBVTT_VOICE_TAG:
                if not line.voice_name:
                    line.voice_name = tag.annotation or None
                else:
                    logger.warning(f"Found another voice name {tag.annotation!r} in {text!r}, ignoring")
                continue

            stack.append(tag)

        else:
            style = None
            if stack:
                style = StyleAttributes(tags=list(stack))
                style.propagate()
            line.items.extend(_split_inline_timestamps(raw, style))

    return line


def _color_tag_name(style: Optional[StyleAttributes]) -> Optional[str]:
    """Color class to wrap a run in, unless a class tag already carries it."""
    if style is None or not style.color:
        return None

    name = HEX_TO_COLOR_NAME.get(style.color.lower())
    if name is None:
        return None

    for tag in style.tags:
        if tag.name == WEBVTT_CLASS_TAG and name in (c.lower() for c in tag.classes):
            return None
    return name


def render_line_item(item: LineItem) -> str:
    """Render a text run with its inline timestamp, color and tag stack."""
    parts = []
    if item.start_at is not None and item.start_at > timedelta(0):
        parts.append(f"<{TimeConverter.format_timestamp(item.start_at)}>")

    tags = item.inline_style.tags if item.inline_style else []
    color = _color_tag_name(item.inline_style)

    if color:
        parts.append(f"<{WEBVTT_CLASS_TAG}.{color}>")
    parts.extend(tag.start_tag() for tag in tags)
    parts.append(escape_text(item.text))
    parts.extend(tag.end_tag() for tag in reversed(tags))
    if color:
        parts.append(f"</{WEBVTT_CLASS_TAG}>")

    return "".join(parts)


def render_line(line: Line) -> str:
    """Render a line of cue text, without the trailing line break."""
    prefix = f"<{WEBVTT_VOICE_TAG} {line.voice_name}>" if line.voice_name else ""
    return prefix + " ".join(render_line_item(item) for item in line.items)
