"""Output buffer entity for the current command window."""

from dataclasses import dataclass

# Business rules
OUTPUT_BUFFER_MAX_CHARS = 50_000
OUTPUT_BUFFER_TRUNCATE_TO = 30_000


@dataclass
class OutputBuffer:
    """Bounded text accumulator for scrubbed terminal output.

    Once an append pushes the length past ``max_chars`` the buffer is
    collapsed to its trailing ``truncate_to`` characters, so the most
    recent output is always kept.
    """

    max_chars: int = OUTPUT_BUFFER_MAX_CHARS
    truncate_to: int = OUTPUT_BUFFER_TRUNCATE_TO
    _text: str = ""

    def __post_init__(self) -> None:
        if self.truncate_to <= 0:
            raise ValueError("truncate_to must be positive")
        if self.truncate_to >= self.max_chars:
            raise ValueError("truncate_to must be smaller than max_chars")

    @property
    def size(self) -> int:
        """Current buffer length in characters."""
        return len(self._text)

    @property
    def is_empty(self) -> bool:
        """Check if buffer is empty."""
        return not self._text

    def append(self, chunk: str) -> None:
        """Append a chunk, collapsing to the tail when over the ceiling."""
        self._text += chunk
        if len(self._text) > self.max_chars:
            self._text = self._text[-self.truncate_to :]

    def reset(self) -> None:
        """Clear the buffer."""
        self._text = ""

    def snapshot(self, max_lines: int | None = None) -> str:
        """Return buffer contents, optionally only the trailing lines.

        Args:
            max_lines: Number of trailing newline-separated lines to keep.
                None or 0 returns everything.
        """
        if not max_lines or max_lines < 0:
            return self._text
        return "\n".join(self._text.split("\n")[-max_lines:])

    def __len__(self) -> int:
        return len(self._text)
