"""Domain value objects - immutable data structures."""

from .envelope import (
    INPUT_TYPE,
    OUTPUT_TYPE,
    Frame,
    RawFrame,
    StructuredFrame,
    decode_frame,
    encode_input,
)
from .terminal_target import DEFAULT_MODE, TerminalTarget

__all__ = [
    "TerminalTarget",
    "DEFAULT_MODE",
    "Frame",
    "StructuredFrame",
    "RawFrame",
    "decode_frame",
    "encode_input",
    "INPUT_TYPE",
    "OUTPUT_TYPE",
]
