"""Lines piped into standard input."""

import asyncio
import sys
from collections.abc import AsyncIterator
from typing import TextIO


def stdin_is_piped(stream: TextIO | None = None) -> bool:
    """True when stdin is a pipe or file rather than a terminal."""
    stream = stream or sys.stdin
    try:
        return not stream.isatty()
    except ValueError:
        return False


async def read_lines(stream: TextIO | None = None) -> AsyncIterator[str]:
    """Yield lines from a blocking text stream without blocking the loop."""
    stream = stream or sys.stdin
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            return
        yield line.rstrip("\n")
