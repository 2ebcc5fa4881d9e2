"""Tail of an append-only history file."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class HistoryFileTail:
    """Returns lines appended to a file since the previous poll.

    Reading starts at the end of the file as it was when the tail was
    first attached, so existing history is not re-uploaded. A partial
    trailing line is held back until its newline arrives.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._offset: int | None = None
        self._partial = b""

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def attach(self) -> int:
        """Start tailing from the current end of file; returns its size."""
        self._offset = self._path.stat().st_size
        self._partial = b""
        return self._offset

    def poll(self) -> list[str]:
        """Read complete, non-empty lines appended since the last poll."""
        if self._offset is None:
            self.attach()
            return []

        size = self._path.stat().st_size
        if size < self._offset:
            logger.info("History file truncated path=%s, restarting from 0", self._path)
            self._offset = 0
            self._partial = b""
        if size == self._offset:
            return []

        with open(self._path, "rb") as f:
            f.seek(self._offset)
            data = f.read(size - self._offset)
        self._offset += len(data)

        data = self._partial + data
        *complete, self._partial = data.split(b"\n")
        text_lines = (line.decode("utf-8", errors="replace") for line in complete)
        return [line for line in text_lines if line.strip()]


def parse_history_line(line: str) -> dict[str, Any] | None:
    """Decode one JSONL record, or None when the line is plain text."""
    try:
        record = json.loads(line)
    except ValueError:
        return None
    return record if isinstance(record, dict) else None
