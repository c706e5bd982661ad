"""Inbound routing: agent bindings and session keys."""

from .bindings import DEFAULT_AGENT_ID, resolve_agent_binding, resolve_agent_for_channel
from .session_keys import SessionKey, build_session_key, parse_session_key

__all__ = [
    "DEFAULT_AGENT_ID",
    "SessionKey",
    "build_session_key",
    "parse_session_key",
    "resolve_agent_binding",
    "resolve_agent_for_channel",
]
