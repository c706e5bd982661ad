"""
switchboard multi-agent sessions.
"""

from .engine import AgentRunResult, SessionEngine, SessionParams
from .multi_agent import MultiAgentCoordinator, SpawnResult
from .registry import AgentEntry, AgentRegistry

__all__ = [
    "AgentEntry",
    "AgentRegistry",
    "AgentRunResult",
    "MultiAgentCoordinator",
    "SessionEngine",
    "SessionParams",
    "SpawnResult",
]
