"""Wire envelopes exchanged with the remote terminal."""

import json
from dataclasses import dataclass
from typing import Any

INPUT_TYPE = "input"
OUTPUT_TYPE = "output"


@dataclass(frozen=True, slots=True)
class StructuredFrame:
    """Inbound JSON object carrying a ``type`` discriminator."""

    type: str
    data: Any = None

    @property
    def text(self) -> str:
        """Payload as text; non-string payloads are stringified."""
        if self.data is None:
            return ""
        if isinstance(self.data, str):
            return self.data
        return str(self.data)


@dataclass(frozen=True, slots=True)
class RawFrame:
    """Inbound message that is not a structured envelope."""

    text: str


Frame = StructuredFrame | RawFrame


def decode_frame(message: str | bytes) -> Frame:
    """Decode an inbound socket message.

    Never raises: anything that is not a JSON object with a ``type``
    key comes back as a RawFrame with the original text.
    """
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")

    try:
        payload = json.loads(message)
    except ValueError:
        return RawFrame(message)

    if not isinstance(payload, dict) or "type" not in payload:
        return RawFrame(message)

    return StructuredFrame(type=str(payload["type"]), data=payload.get("data"))


def encode_input(data: str) -> str:
    """Encode a client-to-server input frame."""
    return json.dumps({"type": INPUT_TYPE, "data": data})
