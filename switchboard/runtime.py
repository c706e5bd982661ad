"""
Composition root: builds the hook manager, agent registry and coordinator
from settings and the assistant config, with no shared global state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .agents.engine import SessionEngine
from .agents.multi_agent import MultiAgentCoordinator
from .agents.registry import AgentRegistry
from .config import AssistantConfig, Settings, get_settings, load_assistant_config
from .hooks.bundled import install_default_hooks
from .hooks.lifecycle import HookEvents, HookManager
from .logging_config import setup_logging
from .memory.summaries import SessionSummaryStore

logger = logging.getLogger(__name__)


@dataclass
class Switchboard:
    settings: Settings
    config: AssistantConfig
    hooks: HookManager
    agents: MultiAgentCoordinator
    summaries: SessionSummaryStore

    async def boot(self) -> None:
        await self.hooks.fire(HookEvents.BOOT, {"config": self.config})

    async def shutdown(self) -> None:
        await self.hooks.fire(HookEvents.SHUTDOWN, {})
        removed = self.agents.clear_all_agents()
        logger.info("Shut down switchboard (%d agents released)", removed)


def create_switchboard(
    engine: SessionEngine,
    *,
    config: AssistantConfig | None = None,
    settings: Settings | None = None,
    configure_logging: bool = False,
) -> Switchboard:
    """
    Wire up a fresh Switchboard around the given session engine.

    With configure_logging, the root logger is set up from settings
    (log_level, logs_dir, json_logs) before anything else is built.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.logs_dir, settings.json_logs)
    if config is None:
        config = load_assistant_config(settings.config_path)

    hooks = HookManager(timeout=settings.hook_timeout_seconds)
    summaries = SessionSummaryStore(settings.summaries_file)
    installed = install_default_hooks(hooks, config, summaries)
    agents = MultiAgentCoordinator(AgentRegistry(), engine, config)

    logger.info(
        "Switchboard ready (hooks=%d, bindings=%d)",
        installed,
        len(config.multi_agent.bindings),
    )
    return Switchboard(
        settings=settings,
        config=config,
        hooks=hooks,
        agents=agents,
        summaries=summaries,
    )
