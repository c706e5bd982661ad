"""
Multi-agent lifecycle: spawn named agents, route messages between them,
and list or remove them.

Each spawned agent gets its own ephemeral engine session, registered under
its id before its first prompt runs, so it is addressable while that prompt
is still executing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from ..config import AssistantConfig
from ..exceptions import AgentAlreadyExistsError, AgentNotFoundError
from ..models import AgentInfo
from .engine import SessionEngine, SessionParams
from .registry import AgentEntry, AgentRegistry

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def agent_session_name(agent_id: str) -> str:
    return f"agent:{agent_id}"


def agent_message_prefix(from_agent_id: str) -> str:
    """Marker prepended to agent-to-agent messages."""
    return f'[Message from agent "{from_agent_id}"]:\n'


@dataclass
class SpawnResult:
    agent_id: str
    response: str


class MultiAgentCoordinator:
    """
    Spawns agents into an AgentRegistry and routes messages between them.

    Dependencies are injected at construction time; nothing here is global.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        engine: SessionEngine,
        config: AssistantConfig,
    ) -> None:
        self._registry = registry
        self._engine = engine
        self._config = config
        # Ids claimed by spawns still waiting on create_session
        self._pending: set[str] = set()

    @property
    def registry(self) -> AgentRegistry:
        return self._registry

    def _generate_agent_id(self) -> str:
        millis = time.time_ns() // 1_000_000
        agent_id = f"agent-{_to_base36(millis)}"
        while agent_id in self._registry or agent_id in self._pending:
            millis += 1
            agent_id = f"agent-{_to_base36(millis)}"
        return agent_id

    async def spawn_agent(
        self,
        prompt: str,
        workspace_dir: str,
        *,
        agent_id: str | None = None,
        spawner_agent_id: str | None = None,
    ) -> SpawnResult:
        """
        Create an agent session, register it, and run its initial prompt.

        Args:
            prompt:           Initial prompt to run in the new session.
            workspace_dir:    Workspace the session is bound to.
            agent_id:         Id to register under; generated when omitted.
            spawner_agent_id: Id of the agent that requested the spawn, if any.

        Returns:
            SpawnResult with the agent id and the initial prompt's text.

        Raises:
            AgentAlreadyExistsError: agent_id is registered or being spawned.
            Any exception from the engine's create_session or run_agent.
        """
        if agent_id is None:
            agent_id = self._generate_agent_id()
        elif agent_id in self._registry or agent_id in self._pending:
            raise AgentAlreadyExistsError(agent_id)

        definition = self._config.multi_agent.find_agent(agent_id)
        session_name = agent_session_name(agent_id)

        if spawner_agent_id:
            logger.info("Spawning agent: %s (spawned by %s)", agent_id, spawner_agent_id,
                        extra={"agent_id": agent_id})
        else:
            logger.info("Spawning agent: %s", agent_id, extra={"agent_id": agent_id})

        # Claimed before the first await, released once registered or failed
        self._pending.add(agent_id)
        try:
            session = await self._engine.create_session(
                SessionParams(
                    session_name=session_name,
                    workspace_dir=workspace_dir,
                    agent_id=agent_id,
                    model=definition.model if definition else None,
                    ephemeral=True,
                )
            )
            self._registry.add(
                AgentEntry(id=agent_id, session=session, spawner_agent_id=spawner_agent_id)
            )
        finally:
            self._pending.discard(agent_id)

        result = await self._engine.run_agent(
            session,
            prompt,
            session_name=session_name,
            workspace_dir=workspace_dir,
        )
        return SpawnResult(agent_id=agent_id, response=result.text)

    async def send_to_agent(
        self,
        from_agent_id: str,
        to_agent_id: str,
        message: str,
        workspace_dir: str,
    ) -> str:
        """
        Run a message from one agent in another agent's session.

        Returns:
            The target agent's response text.

        Raises:
            AgentNotFoundError: to_agent_id is not registered.
        """
        target = self._registry.get(to_agent_id)
        if target is None:
            raise AgentNotFoundError(to_agent_id)

        logger.debug("Routing message %s → %s", from_agent_id, to_agent_id)
        result = await self._engine.run_agent(
            target.session,
            agent_message_prefix(from_agent_id) + message,
            session_name=agent_session_name(to_agent_id),
            workspace_dir=workspace_dir,
        )
        return result.text

    def get_agent(self, agent_id: str) -> AgentEntry | None:
        return self._registry.get(agent_id)

    def list_agents(self) -> list[AgentInfo]:
        return self._registry.list_agents()

    def remove_agent(self, agent_id: str) -> bool:
        return self._registry.remove(agent_id)

    def clear_all_agents(self) -> int:
        return self._registry.clear()
