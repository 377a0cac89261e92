"""Timeline Synthesizer module."""

from .synthesizer import (
    RUN_ACTIVITY,
    TimelineSynthesizer,
    by_start_offset,
    longest_first,
)

__all__ = ["RUN_ACTIVITY", "TimelineSynthesizer", "by_start_offset", "longest_first"]
