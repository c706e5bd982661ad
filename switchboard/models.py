"""
Pydantic v2 data models for switchboard.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class AgentInfo(BaseModel):
    """Snapshot of a registered agent, as returned by list_agents()."""

    id: str
    spawner: Optional[str] = None
    created_at: datetime


class AgentBinding(BaseModel):
    agent_id: str
    session_key: str


class SessionSummary(BaseModel):
    session: str
    summary: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
