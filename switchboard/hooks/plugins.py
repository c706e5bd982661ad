"""
Registration of hook handlers contributed by plugins.

Each plugin hook gets the id ``plugin:<plugin_id>:<event>:<index>`` so a
plugin's handlers can be found and removed together.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .lifecycle import EventName, HookHandler, HookManager, event_name

logger = logging.getLogger(__name__)


def _prefix(plugin_id: str) -> str:
    return f"plugin:{plugin_id}:"


def register_plugin_hooks(
    manager: HookManager,
    plugin_id: str,
    hooks: Iterable[tuple[EventName, HookHandler]],
    priority: int = 0,
) -> list[str]:
    """Register a plugin's (event, handler) pairs and return the hook ids."""
    ids: list[str] = []
    for index, (event, handler) in enumerate(hooks):
        hook_id = f"{_prefix(plugin_id)}{event_name(event)}:{index}"
        manager.register(hook_id, event, handler, priority)
        ids.append(hook_id)
    logger.debug("Registered %d hooks for plugin %s", len(ids), plugin_id)
    return ids


def unregister_plugin_hooks(manager: HookManager, plugin_id: str) -> int:
    """Remove every hook registered for a plugin. Returns how many were removed."""
    prefix = _prefix(plugin_id)
    ids = [h["id"] for h in manager.list_hooks() if h["id"].startswith(prefix)]
    for hook_id in ids:
        manager.unregister(hook_id)
    return len(ids)
