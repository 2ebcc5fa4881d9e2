"""Checkpoint service - periodic upload of captured transcript text."""

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from shellbridge.domain import KnowledgeStore, KnowledgeStoreError, TranscriptBuffer

logger = logging.getLogger(__name__)

CHECKPOINT_SOURCE = "shellbridge-watch"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def new_session_id(now: datetime | None = None) -> str:
    """Session identifier for one watcher run."""
    moment = now or _utc_now()
    return f"local-{int(moment.timestamp() * 1000)}"


class CheckpointService:
    """Uploads buffered transcript entries to the knowledge store.

    Uploaded entries are only removed after a successful upload, so a
    failed checkpoint is retried with the same entries (plus any new ones)
    on the next call. Entries added during an upload stay buffered.
    """

    def __init__(
        self,
        buffer: TranscriptBuffer,
        knowledge_store: KnowledgeStore,
        project: str,
        backup_dir: Path,
        session_id: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._buffer = buffer
        self._knowledge_store = knowledge_store
        self._project = project
        self._backup_dir = Path(backup_dir)
        self._clock = clock
        self.session_id = session_id or new_session_id(clock())
        self.last_checkpoint: datetime | None = None

    async def checkpoint(self, summary: str = "") -> bool:
        """Send buffered messages; return True if the upload succeeded."""
        if self._buffer.is_empty:
            logger.info("Checkpoint skipped - no new messages")
            return False

        now = self._clock()
        # Entries may keep arriving while the upload is in flight
        count = len(self._buffer)
        messages = self._buffer.to_messages()
        payload = self._build_payload(messages, summary, now)

        try:
            result = await self._knowledge_store.log_session(payload)
        except KnowledgeStoreError as e:
            logger.warning(
                "Checkpoint rejected session_id=%s messages=%d error=%s",
                self.session_id,
                len(messages),
                e,
            )
            return False

        logger.info(
            "Checkpoint sent session_id=%s messages=%d result=%s",
            self.session_id,
            len(messages),
            result,
        )
        self._write_backup(messages, now)
        self._buffer.drop_first(count)
        self.last_checkpoint = now
        return True

    def _build_payload(
        self,
        messages: list[dict[str, Any]],
        summary: str,
        now: datetime,
    ) -> dict[str, Any]:
        return {
            "project": self._project,
            "source": CHECKPOINT_SOURCE,
            "sessionId": self.session_id,
            "summary": summary or f"Local session checkpoint at {now.isoformat()}",
            "messages": messages,
            "metadata": {
                "checkpoint": True,
                "timestamp": int(now.timestamp() * 1000),
                "messageCount": len(messages),
            },
        }

    def _write_backup(self, messages: list[dict[str, Any]], now: datetime) -> None:
        backup_file = self._backup_dir / f"checkpoint-{int(now.timestamp() * 1000)}.json"
        try:
            self._backup_dir.mkdir(parents=True, exist_ok=True)
            backup_file.write_text(
                json.dumps({"sessionId": self.session_id, "messages": messages}, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("Checkpoint backup failed path=%s: %s", backup_file, e)
