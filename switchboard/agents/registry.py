"""
In-memory registry of live agent sessions.

Volatile, process-scoped state: one AgentRegistry is created by the
composition root and passed to whatever needs it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..models import AgentInfo

logger = logging.getLogger(__name__)


@dataclass
class AgentEntry:
    id: str
    session: Any
    spawner_agent_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AgentRegistry:
    """Maps agent ids to their entries; the registry owns each entry's session."""

    def __init__(self) -> None:
        self._entries: dict[str, AgentEntry] = {}

    def add(self, entry: AgentEntry) -> None:
        self._entries[entry.id] = entry
        logger.debug("Registered agent %s", entry.id)

    def get(self, agent_id: str) -> AgentEntry | None:
        return self._entries.get(agent_id)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def list_agents(self) -> list[AgentInfo]:
        """Snapshot of registered agents in registration order."""
        return [
            AgentInfo(id=e.id, spawner=e.spawner_agent_id, created_at=e.created_at)
            for e in self._entries.values()
        ]

    def remove(self, agent_id: str) -> bool:
        """Remove an agent. Returns False if it was not registered."""
        if self._entries.pop(agent_id, None) is None:
            return False
        logger.debug("Removed agent %s", agent_id)
        return True

    def clear(self) -> int:
        """Remove every agent and return how many there were."""
        count = len(self._entries)
        self._entries.clear()
        if count:
            logger.debug("Cleared %d agents", count)
        return count
