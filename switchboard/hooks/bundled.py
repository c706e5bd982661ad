"""
Default hook handlers installed at startup.

Four bundled handlers, registered at priority 0 in this order:
  boot-info           boot             log provider/model/thinking level
  session-summary     session_end      persist the session summary, if any
  injection-detector  message_inbound  flag likely prompt-injection text
  tool-call-auditor   tool_start       log tool name and argument preview

followed by one handler per event named in the configured hook mappings.
Mappings that share an event are applied in config order, so a later
mapping overrides the keys of an earlier one.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from ..config import AssistantConfig, HookMapping
from ..memory.summaries import SessionSummaryStore
from ..models import SessionSummary
from .lifecycle import HookEvents, HookHandler, HookManager, HookOutcome

logger = logging.getLogger(__name__)

INJECTION_PATTERNS = (
    re.compile(r"ignore.*previous.*instructions", re.IGNORECASE),
    re.compile(r"you are now", re.IGNORECASE),
    re.compile(r"jailbreak", re.IGNORECASE),
)

_ARGS_PREVIEW_CHARS = 100
_SUMMARY_MAX_CHARS = 500


def make_boot_info_logger(config: AssistantConfig) -> HookHandler:
    async def boot_info(event: str, payload: dict[str, Any]) -> None:
        active = payload.get("config")
        if not isinstance(active, AssistantConfig):
            active = config
        logger.info(
            "Switchboard booted (model: %s/%s, thinking: %s)",
            active.agent.provider,
            active.agent.model,
            active.agent.thinking_level,
        )

    return boot_info


def make_session_summary_recorder(store: SessionSummaryStore | None) -> HookHandler:
    async def session_summary(event: str, payload: dict[str, Any]) -> None:
        summary = payload.get("summary")
        if not summary or not isinstance(summary, str):
            return
        session = payload.get("session_name") or payload.get("session_key") or "unknown"
        if store is not None:
            await store.append(
                SessionSummary(session=session, summary=summary[:_SUMMARY_MAX_CHARS])
            )
        logger.debug("Session %s ended, summary saved to memory", session)

    return session_summary


async def detect_injection(event: str, payload: dict[str, Any]) -> HookOutcome | None:
    """Flag inbound text that looks like a prompt-injection attempt.

    Advisory only: sets injection_warning on the payload, never aborts.
    """
    body = payload.get("body")
    if not body or not isinstance(body, str):
        return None
    for pattern in INJECTION_PATTERNS:
        if pattern.search(body):
            logger.warning("Potential prompt injection detected in inbound message")
            return HookOutcome(transform={"injection_warning": True})
    return None


async def audit_tool_call(event: str, payload: dict[str, Any]) -> None:
    args = payload.get("args")
    preview = json.dumps(args, default=str)[:_ARGS_PREVIEW_CHARS] if args else ""
    logger.debug("Tool call: %s %s", payload.get("tool_name"), preview)


def make_mapping_handler(mappings: list[HookMapping]) -> HookHandler:
    async def apply_mappings(event: str, payload: dict[str, Any]) -> HookOutcome | None:
        transform: dict[str, Any] = {}
        for mapping in mappings:
            logger.debug("Hook mapping triggered: %s → %s", mapping.match, mapping.action)
            if mapping.model:
                transform["model_override"] = mapping.model
            if mapping.channel:
                transform["channel_override"] = mapping.channel
        if not transform:
            return None
        return HookOutcome(transform=transform)

    return apply_mappings


def install_default_hooks(
    manager: HookManager,
    config: AssistantConfig,
    summary_store: SessionSummaryStore | None = None,
) -> int:
    """
    Register the bundled handlers and the configured mappings.

    Nothing is registered when hooks are disabled in the config.

    Returns:
        Number of handlers registered.
    """
    if not config.hooks.enabled:
        logger.info("Hooks disabled by config")
        return 0

    bundled: list[tuple[str, HookEvents, HookHandler]] = [
        ("boot-info", HookEvents.BOOT, make_boot_info_logger(config)),
        ("session-summary", HookEvents.SESSION_END, make_session_summary_recorder(summary_store)),
        ("injection-detector", HookEvents.MESSAGE_INBOUND, detect_injection),
        ("tool-call-auditor", HookEvents.TOOL_START, audit_tool_call),
    ]
    for hook_id, event, handler in bundled:
        manager.register(hook_id, event, handler)

    by_event: dict[str, list[HookMapping]] = {}
    for mapping in config.hooks.mappings:
        if mapping.match and mapping.action:
            by_event.setdefault(mapping.match, []).append(mapping)

    for match, mappings in by_event.items():
        if len(mappings) > 1:
            logger.info("%d hook mappings share event %s, applying in order", len(mappings), match)
        manager.register(f"mapping-{match}", match, make_mapping_handler(mappings))

    logger.debug("Initialized %d hook mapping handlers from config", len(by_event))
    return len(bundled) + len(by_event)
