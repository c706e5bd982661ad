"""
JSONL-backed store of session summaries.
Append-only: each summary is a single JSON line, written as soon as a
session ends.
"""

import asyncio
import logging
import os

import aiofiles

from ..models import SessionSummary

logger = logging.getLogger(__name__)


class SessionSummaryStore:
    """Appends and reads back session summaries from one JSONL file."""

    def __init__(self, path: str) -> None:
        self.path = path
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self._lock = asyncio.Lock()

    async def append(self, summary: SessionSummary) -> None:
        """Append a single summary line."""
        line = summary.model_dump_json() + "\n"
        async with self._lock:
            async with aiofiles.open(self.path, mode="a", encoding="utf-8") as f:
                await f.write(line)

    async def get_recent(self, limit: int = 20) -> list[SessionSummary]:
        """Return the last `limit` summaries, oldest first."""
        if not os.path.exists(self.path):
            return []
        async with self._lock:
            async with aiofiles.open(self.path, mode="r", encoding="utf-8") as f:
                content = await f.read()

        summaries: list[SessionSummary] = []
        for line in content.strip().split("\n")[-limit:]:
            line = line.strip()
            if not line:
                continue
            try:
                summaries.append(SessionSummary.model_validate_json(line))
            except ValueError as e:
                logger.warning("Skipping corrupt summary line: %s", e)
        return summaries
