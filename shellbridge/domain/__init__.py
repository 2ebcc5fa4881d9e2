"""Pure domain layer - no infrastructure dependencies."""

# Entities
from .entities import (
    OUTPUT_BUFFER_MAX_CHARS,
    OUTPUT_BUFFER_TRUNCATE_TO,
    Connection,
    ConnectionState,
    OutputBuffer,
    SessionState,
    TranscriptBuffer,
    TranscriptEntry,
)

# Errors
from .errors import (
    BridgeError,
    ConnectError,
    ConnectTimeout,
    InvalidArguments,
    KnowledgeStoreError,
    UnknownTool,
    WriteFailure,
)

# Ports
from .ports import KnowledgeStore, SocketDialer, TerminalSocket

# Services
from .services import Timer, classify_line, entries_from_history, scrub
from .values import (
    DEFAULT_MODE,
    OUTPUT_TYPE,
    RawFrame,
    StructuredFrame,
    TerminalTarget,
    decode_frame,
    encode_input,
)

__all__ = [
    # Values
    "TerminalTarget",
    "DEFAULT_MODE",
    "StructuredFrame",
    "RawFrame",
    "OUTPUT_TYPE",
    "decode_frame",
    "encode_input",
    # Entities
    "Connection",
    "ConnectionState",
    "OutputBuffer",
    "OUTPUT_BUFFER_MAX_CHARS",
    "OUTPUT_BUFFER_TRUNCATE_TO",
    "SessionState",
    "TranscriptBuffer",
    "TranscriptEntry",
    # Errors
    "BridgeError",
    "ConnectError",
    "ConnectTimeout",
    "InvalidArguments",
    "KnowledgeStoreError",
    "UnknownTool",
    "WriteFailure",
    # Services
    "scrub",
    "Timer",
    "classify_line",
    "entries_from_history",
    # Ports
    "TerminalSocket",
    "SocketDialer",
    "KnowledgeStore",
]
