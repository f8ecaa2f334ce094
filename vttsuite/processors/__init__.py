"""
Subtitle processing modules.

This package contains the high-level operations built on the core reader
and writer:
- Timing adjustment (fixed offset, first cue alignment)
"""

from .timing_adjuster import TimingAdjuster

__all__ = [
    'TimingAdjuster',
]
