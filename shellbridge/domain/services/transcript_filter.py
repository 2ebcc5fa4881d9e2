"""Classification of tailed terminal text into transcript entries."""

import re
from datetime import UTC, datetime
from typing import Any

from ..entities.transcript_buffer import TranscriptEntry

# Lines shorter than this are only kept when they look like a turn marker
MIN_FREE_TEXT_LENGTH = 50
MAX_ENTRY_CHARS = 2000

USER_PREFIXES = (">", "$", "Human:", "You:")
ASSISTANT_PREFIXES = ("Assistant:", "Claude:")
ASSISTANT_MARKERS = ("I'll", "Let me")

_SPINNER = re.compile(r"^[⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏]+")


def _is_noise(line: str) -> bool:
    if line.startswith("[") and "Terminal]" in line:
        return True
    if "node_modules" in line:
        return True
    return bool(_SPINNER.match(line))


def classify_line(line: str, now: datetime | None = None) -> TranscriptEntry | None:
    """Turn one line of terminal text into a transcript entry.

    Returns None for blank lines, noise, and short lines that carry
    no user or assistant marker.
    """
    trimmed = line.strip()
    if not trimmed or _is_noise(trimmed):
        return None

    is_user = trimmed.startswith(USER_PREFIXES)
    is_assistant = trimmed.startswith(ASSISTANT_PREFIXES) or any(
        marker in trimmed for marker in ASSISTANT_MARKERS
    )

    if not (is_user or is_assistant or len(trimmed) > MIN_FREE_TEXT_LENGTH):
        return None

    return TranscriptEntry(
        timestamp=now or datetime.now(UTC),
        content=trimmed,
        role="user" if is_user else "assistant",
    )


def entries_from_history(
    record: dict[str, Any],
    max_chars: int = MAX_ENTRY_CHARS,
    now: datetime | None = None,
) -> list[TranscriptEntry]:
    """Extract entries from one decoded history-file record.

    A record may carry a free-text ``message`` (classified like a
    terminal line), an explicit ``role``/``content`` pair, or both.
    """
    entries = []
    timestamp = now or datetime.now(UTC)

    message = record.get("message")
    if isinstance(message, str):
        entry = classify_line(message, timestamp)
        if entry:
            entries.append(entry)

    role = record.get("role")
    content = record.get("content")
    if role and isinstance(content, str) and content:
        entries.append(
            TranscriptEntry(timestamp=timestamp, content=content[:max_chars], role=str(role))
        )

    return entries
