"""Domain entities - objects with identity and lifecycle."""

from .connection import Connection, ConnectionState
from .output_buffer import OUTPUT_BUFFER_MAX_CHARS, OUTPUT_BUFFER_TRUNCATE_TO, OutputBuffer
from .session_state import SessionState
from .transcript_buffer import TranscriptBuffer, TranscriptEntry

__all__ = [
    "Connection",
    "ConnectionState",
    "OutputBuffer",
    "OUTPUT_BUFFER_MAX_CHARS",
    "OUTPUT_BUFFER_TRUNCATE_TO",
    "SessionState",
    "TranscriptBuffer",
    "TranscriptEntry",
]
