"""
Resolve which agent and session key handle an inbound message.
"""

from __future__ import annotations

import logging

from ..config import AssistantConfig, BindingMatch
from ..models import AgentBinding
from .session_keys import build_session_key

logger = logging.getLogger(__name__)

DEFAULT_AGENT_ID = "default"
DEFAULT_PART = "default"


def _matches(match: BindingMatch, channel_id: str, account_id: str | None, peer_id: str | None) -> bool:
    if match.channel != channel_id:
        return False
    if match.account is not None and match.account != account_id:
        return False
    if match.peer is not None and match.peer != peer_id:
        return False
    return True


def resolve_agent_for_channel(
    config: AssistantConfig,
    channel_id: str,
    account_id: str | None = None,
    peer_id: str | None = None,
) -> str | None:
    """Return the agent id of the first matching binding rule, or None."""
    for rule in config.multi_agent.bindings:
        if _matches(rule.match, channel_id, account_id, peer_id):
            return rule.agent_id
    return None


def resolve_agent_binding(
    config: AssistantConfig,
    channel_id: str,
    account_id: str | None = None,
    peer_id: str | None = None,
) -> AgentBinding:
    """
    Compute the agent and session key for a message.

    Falls back to the "default" agent when no rule matches; missing account
    and peer parts (None) of the key are filled with "default".
    """
    agent_id = resolve_agent_for_channel(config, channel_id, account_id, peer_id) or DEFAULT_AGENT_ID
    session_key = build_session_key(
        agent_id,
        channel_id,
        account_id if account_id is not None else DEFAULT_PART,
        peer_id if peer_id is not None else DEFAULT_PART,
    )
    logger.debug("Resolved %s to agent %s (session %s)", channel_id, agent_id, session_key)
    return AgentBinding(agent_id=agent_id, session_key=session_key)
