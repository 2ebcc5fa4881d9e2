"""Transcript sources - history file and stdin."""

from .history_file import HistoryFileTail, parse_history_line
from .stdin_source import read_lines, stdin_is_piped

__all__ = [
    "HistoryFileTail",
    "parse_history_line",
    "read_lines",
    "stdin_is_piped",
]
