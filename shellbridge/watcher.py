"""Transcript watcher - tails conversation text and checkpoints it."""

import asyncio
import logging
import signal
from contextlib import suppress
from datetime import UTC, datetime
from typing import TextIO

from shellbridge.application.services import AsyncioTimer, CheckpointService
from shellbridge.config import Config, load_config
from shellbridge.domain import Timer, TranscriptBuffer, classify_line, entries_from_history
from shellbridge.infrastructure.sources import (
    HistoryFileTail,
    parse_history_line,
    read_lines,
    stdin_is_piped,
)
from shellbridge.logging_setup import setup_logging_from_env

logger = logging.getLogger(__name__)


class TranscriptWatcher:
    """Feeds a transcript buffer from a source and checkpoints it periodically."""

    def __init__(
        self,
        buffer: TranscriptBuffer,
        checkpoint_service: CheckpointService,
        history: HistoryFileTail,
        poll_interval: float = 5.0,
        checkpoint_interval: float = 1800.0,
        max_entry_chars: int = 2000,
        timer: Timer | None = None,
    ) -> None:
        self._buffer = buffer
        self._checkpoint_service = checkpoint_service
        self._history = history
        self._poll_interval = poll_interval
        self._checkpoint_interval = checkpoint_interval
        self._max_entry_chars = max_entry_chars
        self._timer = timer or AsyncioTimer()

    @property
    def session_id(self) -> str:
        return self._checkpoint_service.session_id

    def ingest_line(self, line: str) -> None:
        """Classify a plain terminal line and buffer it if relevant."""
        entry = classify_line(line)
        if entry:
            self._buffer.add(entry)

    def ingest_history_line(self, line: str) -> None:
        """Buffer a history-file line, JSON record or plain text."""
        record = parse_history_line(line)
        if record is None:
            self.ingest_line(line)
        else:
            self._buffer.extend(entries_from_history(record, self._max_entry_chars))

    def poll_history(self) -> int:
        """Read new history lines once; returns how many were read."""
        lines = self._history.poll()
        for line in lines:
            self.ingest_history_line(line)
        if lines:
            logger.info(
                "Processed new history entries lines=%d buffer_size=%d",
                len(lines),
                len(self._buffer),
            )
        return len(lines)

    async def watch_history(self) -> None:
        """Poll the history file, waiting for it to appear first."""
        while not self._history.exists():
            logger.info("History file not found, waiting... path=%s", self._history.path)
            await self._timer.sleep(self._poll_interval)

        size = self._history.attach()
        logger.info("Watching history file path=%s size=%d", self._history.path, size)

        while True:
            await self._timer.sleep(self._poll_interval)
            try:
                self.poll_history()
            except OSError as e:
                logger.error("Error reading history path=%s: %s", self._history.path, e)

    async def watch_stream(self, stream: TextIO | None = None) -> None:
        """Read terminal lines from a piped stream until EOF."""
        logger.info("Watching stdin for terminal output")
        async for line in read_lines(stream):
            self.ingest_line(line)

    async def checkpoint_loop(self) -> None:
        while True:
            await self._timer.sleep(self._checkpoint_interval)
            await self._checkpoint_service.checkpoint()

    async def run(self, use_stdin: bool = False) -> None:
        """Watch until a signal arrives or the stream ends, then checkpoint."""
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            with suppress(NotImplementedError):
                loop.add_signal_handler(sig, stop.set)

        source = asyncio.create_task(self.watch_stream() if use_stdin else self.watch_history())
        checkpoints = asyncio.create_task(self.checkpoint_loop())
        stopper = asyncio.create_task(stop.wait())

        try:
            await asyncio.wait({source, stopper}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (source, checkpoints, stopper):
                task.cancel()
            await asyncio.gather(source, checkpoints, stopper, return_exceptions=True)

        logger.info("Shutting down, final checkpoint...")
        await self._checkpoint_service.checkpoint()


def create_watcher(config: Config, timer: Timer | None = None) -> TranscriptWatcher:
    """Wire a watcher from configuration."""
    from shellbridge.composition import create_knowledge_store

    buffer = TranscriptBuffer()
    checkpoint_service = CheckpointService(
        buffer=buffer,
        knowledge_store=create_knowledge_store(config),
        project=config.terminal.default_project,
        backup_dir=config.watcher.log_dir.expanduser(),
    )
    return TranscriptWatcher(
        buffer=buffer,
        checkpoint_service=checkpoint_service,
        history=HistoryFileTail(config.watcher.history_file),
        poll_interval=config.watcher.poll_interval,
        checkpoint_interval=config.watcher.checkpoint_interval,
        max_entry_chars=config.watcher.max_entry_chars,
        timer=timer,
    )


def main() -> None:
    """Entry point for the ``shellbridge-watch`` command."""
    from shellbridge.cli import display_watcher_banner, parse_watcher_args

    args = parse_watcher_args()
    config = load_config(args.config)
    if args.history_file:
        config.watcher.history_file = args.history_file
    if args.interval:
        config.watcher.checkpoint_interval = args.interval * 60

    log_dir = config.watcher.log_dir.expanduser()
    log_file = log_dir / f"watcher-{datetime.now(UTC).date().isoformat()}.log"
    setup_logging_from_env(verbose=args.verbose, log_file=log_file)

    watcher = create_watcher(config)
    use_stdin = stdin_is_piped()
    display_watcher_banner(
        session_id=watcher.session_id,
        knowledge_url=config.knowledge.url,
        checkpoint_minutes=config.watcher.checkpoint_interval / 60,
        log_dir=str(log_dir),
        source="stdin" if use_stdin else str(config.watcher.history_file),
    )
    logger.info("Watcher starting session_id=%s", watcher.session_id)

    asyncio.run(watcher.run(use_stdin=use_stdin))


if __name__ == "__main__":
    main()
