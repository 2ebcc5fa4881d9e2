"""Domain services - pure business logic operations."""

from .ansi_scrubber import scrub
from .timer import Timer
from .transcript_filter import classify_line, entries_from_history

__all__ = [
    "scrub",
    "Timer",
    "classify_line",
    "entries_from_history",
]
