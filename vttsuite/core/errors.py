"""
Exceptions raised while reading WebVTT content.

Every parse error aborts the whole read. When the failing input line is
known it is stored in ``line_number`` and prefixed to the message.
"""

from typing import Optional


class WebVTTError(ValueError):
    """Base class for WebVTT parse errors."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        self.reason = message
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)

    def at_line(self, line_number: int) -> 'WebVTTError':
        """Return a copy of this error bound to an input line number."""
        return type(self)(self.reason, line_number)


class MalformedTimestamp(WebVTTError):
    """Timestamp text does not match ``[HH:]MM:SS.mmm``."""


class MalformedCorrelationHeader(WebVTTError):
    """X-TIMESTAMP-MAP header is missing a separator or has a bad sub-field."""


class MalformedRegionDeclaration(WebVTTError):
    """Region setting without ``=``, or a non-integer ``lines`` value."""


class UnknownRegion(WebVTTError):
    """Cue references a region id that was never declared."""


class MalformedInlineStyle(WebVTTError):
    """Cue setting on a timing line without ``:``."""


class CorrelationHeaderAfterCues(WebVTTError):
    """X-TIMESTAMP-MAP header found after cue text was already read."""
