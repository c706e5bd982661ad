"""Lifecycle hooks system for switchboard.

Lets independently registered handlers observe, transform and abort
lifecycle events without modifying the code that fires them.
"""

from switchboard.hooks.bundled import install_default_hooks
from switchboard.hooks.lifecycle import (
    HOOK_TIMEOUT_SECONDS,
    WILDCARD,
    HookEvents,
    HookManager,
    HookOutcome,
    HookRegistration,
)
from switchboard.hooks.plugins import register_plugin_hooks, unregister_plugin_hooks

__all__ = [
    "HOOK_TIMEOUT_SECONDS",
    "WILDCARD",
    "HookEvents",
    "HookManager",
    "HookOutcome",
    "HookRegistration",
    "install_default_hooks",
    "register_plugin_hooks",
    "unregister_plugin_hooks",
]
