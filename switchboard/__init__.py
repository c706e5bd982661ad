"""
switchboard: lifecycle hook dispatch and multi-agent session routing
for a chat-driven assistant.
"""

from .runtime import Switchboard, create_switchboard

__all__ = ["Switchboard", "create_switchboard"]
