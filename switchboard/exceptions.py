"""Custom exception hierarchy for switchboard."""


class SwitchboardError(Exception):
    """Base exception for switchboard."""
    pass


class ConfigError(SwitchboardError):
    """Raised when the assistant configuration file cannot be parsed or validated."""
    pass


class HookError(SwitchboardError):
    """Raised internally when a hook handler fails without an exception of its own."""
    pass


class HookTimeoutError(HookError):
    """Raised internally when a hook handler misses its deadline."""

    def __init__(self, hook_id: str, timeout: float) -> None:
        super().__init__(f"Hook {hook_id} timed out ({timeout * 1000:.0f}ms)")
        self.hook_id = hook_id
        self.timeout = timeout


class AgentNotFoundError(SwitchboardError, LookupError):
    """Raised when a message targets an agent that is not registered."""

    def __init__(self, agent_id: str) -> None:
        super().__init__(f"Agent {agent_id} not found")
        self.agent_id = agent_id


class AgentAlreadyExistsError(SwitchboardError):
    """Raised when spawning an agent under an id that is already registered."""

    def __init__(self, agent_id: str) -> None:
        super().__init__(f"Agent {agent_id} already exists")
        self.agent_id = agent_id


class HookCancelledError(HookError):
    """Raised internally when a hook handler's task ends cancelled."""

    def __init__(self, hook_id: str) -> None:
        super().__init__(f"Hook {hook_id} was cancelled")
        self.hook_id = hook_id
