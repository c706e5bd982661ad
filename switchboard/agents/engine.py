"""
Contract for the session-execution engine that actually runs agents.

The engine owns model invocation, the tool loop and context management.
This package only creates sessions through it and runs prompts in them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class SessionParams:
    session_name: str
    workspace_dir: str
    agent_id: str | None = None
    model: str | None = None
    ephemeral: bool = False


@dataclass
class AgentRunResult:
    text: str


class SessionEngine(ABC):
    """
    Base class for session-execution engines.

    Implementations must provide:
        - create_session(params) → opaque session handle
        - run_agent(session, prompt, ...) → AgentRunResult
    """

    @abstractmethod
    async def create_session(self, params: SessionParams) -> Any:
        """Create a session. Ephemeral sessions are never persisted."""

    @abstractmethod
    async def run_agent(
        self,
        session: Any,
        prompt: str,
        *,
        session_name: str,
        workspace_dir: str,
    ) -> AgentRunResult:
        """Run one prompt to completion in an existing session."""
