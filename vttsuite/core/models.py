"""
WebVTT document model.

This module provides the data structures shared by the reader, the writer and
the processors:
- Document: ordered cues plus style and region tables
- Cue, Line and LineItem: timed text with inline markup
- StyleAttributes, Style and Region: presentation hints and their fallbacks
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Optional
from vttsuite.core.tables import COLOR_NAME_TO_HEX
from vttsuite.utils.constants import WEBVTT_CLASS_TAG


def first_present(*values: Any) -> Any:
    """Return the first value that is set (not None, empty or zero)."""
    for value in values:
        if value:
            return value
    return None


@dataclass
class WebVTTTag:
    """An inline markup tag such as ``<b>``, ``<c.yellow>`` or ``<lang en>``."""
    name: str
    classes: List[str] = field(default_factory=list)
    annotation: Optional[str] = None

    def start_tag(self) -> str:
        """Render the opening tag."""
        text = self.name
        if self.classes:
            text += "." + ".".join(self.classes)
        if self.annotation:
            text += " " + self.annotation
        return f"<{text}>"

    def end_tag(self) -> str:
        """Render the closing tag."""
        return f"</{self.name}>"

    def color(self) -> Optional[str]:
        """Hex color named by this tag's classes, if it is a class tag."""
        if self.name != WEBVTT_CLASS_TAG:
            return None
        return first_present(*(COLOR_NAME_TO_HEX.get(c.lower()) for c in reversed(self.classes)))


@dataclass
class StyleAttributes:
    """
    Sparse presentation hints.

    Every field is optional; an unset field inherits from the next source in
    the fallback chain. ``color`` is derived from ``tags`` by propagate().
    """
    align: Optional[str] = None
    line: Optional[str] = None
    position: Optional[str] = None
    size: Optional[str] = None
    vertical: Optional[str] = None
    lines: Optional[int] = None
    region_anchor: Optional[str] = None
    scroll: Optional[str] = None
    viewport_anchor: Optional[str] = None
    width: Optional[str] = None
    tags: List[WebVTTTag] = field(default_factory=list)
    color: Optional[str] = None

    def propagate(self) -> None:
        """Recompute derived fields, call after every change to ``tags``."""
        # Innermost class tag wins
        self.color = first_present(*(tag.color() for tag in reversed(self.tags)))


def resolve_attribute(name: str, *sources: Optional[StyleAttributes]) -> Any:
    """
    Resolve one attribute along a fallback chain.

    Args:
        name: StyleAttributes field name
        *sources: Attribute sets ordered from highest to lowest precedence

    Returns:
        The first set value, or None
    """
    return first_present(*(getattr(source, name) for source in sources if source is not None))


@dataclass
class Style:
    """Named style sheet block, kept as raw declaration lines."""
    id: str
    declarations: List[str] = field(default_factory=list)
    inline_style: StyleAttributes = field(default_factory=StyleAttributes)


@dataclass
class Region:
    """Named layout region declared with ``Region:``."""
    id: str
    inline_style: StyleAttributes = field(default_factory=StyleAttributes)
    style: Optional[str] = None  # Style id used as fallback


@dataclass
class LineItem:
    """A contiguous run of text sharing the same markup."""
    text: str
    start_at: Optional[timedelta] = None  # From an inline <HH:MM:SS.mmm> marker
    inline_style: Optional[StyleAttributes] = None


@dataclass
class Line:
    """One visual row of cue text."""
    items: List[LineItem] = field(default_factory=list)
    voice_name: Optional[str] = None

    def text(self) -> str:
        """Plain text of the row, items joined by a space."""
        return " ".join(item.text for item in self.items)


@dataclass
class Cue:
    """Represents a single WebVTT cue."""
    start: timedelta
    end: timedelta
    lines: List[Line] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    index: int = 0  # Informational, renumbered on write
    inline_style: StyleAttributes = field(default_factory=StyleAttributes)
    region: Optional[str] = None  # Region id
    style: Optional[str] = None   # Style id

    def duration(self) -> timedelta:
        """Get the duration of this cue."""
        return self.end - self.start

    def text(self) -> str:
        """Plain text of the cue, one row per line."""
        return "\n".join(line.text() for line in self.lines)


@dataclass
class Document:
    """A parsed WebVTT file."""
    cues: List[Cue] = field(default_factory=list)
    styles: Dict[str, Style] = field(default_factory=dict)
    regions: Dict[str, Region] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """True when the document holds no cues."""
        return not self.cues

    def get_region(self, region_id: Optional[str]) -> Optional[Region]:
        """Look up a region by id."""
        if region_id is None:
            return None
        return self.regions.get(region_id)

    def get_style(self, style_id: Optional[str]) -> Optional[Style]:
        """Look up a style by id."""
        if style_id is None:
            return None
        return self.styles.get(style_id)

    def cue_attribute(self, cue: Cue, name: str) -> Any:
        """
        Resolve a cue setting.

        Precedence: the cue's inline value, then the cue's style, then the
        style referenced by the cue's region.
        """
        style = self.get_style(cue.style)
        region = self.get_region(cue.region)
        region_style = self.get_style(region.style) if region else None
        return resolve_attribute(
            name,
            cue.inline_style,
            style.inline_style if style else None,
            region_style.inline_style if region_style else None
        )

    def region_attribute(self, region: Region, name: str) -> Any:
        """Resolve a region setting: region value first, then the region's style."""
        style = self.get_style(region.style)
        return resolve_attribute(name, region.inline_style, style.inline_style if style else None)

    def duration(self) -> timedelta:
        """Latest cue end time, zero for an empty document."""
        return max((cue.end for cue in self.cues), default=timedelta(0))

    def add(self, delta: timedelta) -> None:
        """
        Shift every cue by a fixed delta.

        Cues pushed entirely to or before zero are dropped; a start time that
        would become negative is clamped to zero.

        Args:
            delta: Shift to apply (negative values move cues earlier)
        """
        zero = timedelta(0)
        kept = []
        for cue in self.cues:
            cue.start += delta
            cue.end += delta
            if cue.start <= zero and cue.end <= zero:
                continue
            if cue.start < zero:
                cue.start = zero
            kept.append(cue)
        self.cues[:] = kept
