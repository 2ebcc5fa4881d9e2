"""Transcript buffer entity for checkpoint uploads."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class TranscriptEntry:
    """One line of conversation captured by the watcher."""

    timestamp: datetime
    content: str
    role: str

    def to_message(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class TranscriptBuffer:
    """Ordered entries waiting for the next checkpoint."""

    _entries: list[TranscriptEntry] = field(default_factory=list)

    def add(self, entry: TranscriptEntry) -> None:
        self._entries.append(entry)

    def extend(self, entries: list[TranscriptEntry]) -> None:
        self._entries.extend(entries)

    def to_messages(self) -> list[dict[str, Any]]:
        """Serialize entries in arrival order."""
        return [entry.to_message() for entry in self._entries]

    def drop_first(self, count: int) -> None:
        """Remove the oldest ``count`` entries, keeping anything added since."""
        del self._entries[:count]

    def clear(self) -> None:
        self._entries.clear()

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)
