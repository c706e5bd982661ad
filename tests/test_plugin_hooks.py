"""Tests for switchboard/hooks/plugins.py"""

import pytest
from unittest.mock import AsyncMock

from switchboard.hooks.lifecycle import HookEvents
from switchboard.hooks.plugins import register_plugin_hooks, unregister_plugin_hooks


@pytest.mark.asyncio
async def test_plugin_hooks_registered_and_fired(hook_manager):
    inbound = AsyncMock(return_value=None)
    outbound = AsyncMock(return_value=None)

    ids = register_plugin_hooks(
        hook_manager,
        "analytics",
        [(HookEvents.MESSAGE_INBOUND, inbound), ("message_outbound", outbound)],
    )

    assert ids == [
        "plugin:analytics:message_inbound:0",
        "plugin:analytics:message_outbound:1",
    ]
    await hook_manager.fire("message_inbound", {})
    inbound.assert_awaited_once()
    outbound.assert_not_awaited()


def test_unregister_plugin_hooks_only_removes_that_plugin(hook_manager):
    register_plugin_hooks(hook_manager, "a", [("boot", AsyncMock()), ("error", AsyncMock())])
    register_plugin_hooks(hook_manager, "ab", [("boot", AsyncMock())])

    assert unregister_plugin_hooks(hook_manager, "a") == 2
    assert [h["id"] for h in hook_manager.list_hooks()] == ["plugin:ab:boot:0"]
    assert unregister_plugin_hooks(hook_manager, "missing") == 0


def test_plugin_priority_applies(hook_manager):
    hook_manager.register("core", "boot", AsyncMock())
    register_plugin_hooks(hook_manager, "early", [("boot", AsyncMock())], priority=10)
    assert hook_manager.list_hooks()[0]["id"] == "plugin:early:boot:0"
