"""Lifecycle hook registry and runner.

Handlers are registered under a unique id for one lifecycle event (or the
wildcard "*") with a priority. Firing an event runs every matching handler
sequentially, highest priority first, each under its own deadline. Handlers
share one mutable payload dict: a handler can merge keys into it through a
transform, or stop the firing with an abort outcome.
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from ..exceptions import HookCancelledError, HookTimeoutError

logger = logging.getLogger(__name__)

HOOK_TIMEOUT_SECONDS = 5.0
WILDCARD = "*"


class HookEvents(str, Enum):
    """Lifecycle events that can trigger hooks.

    Any other string is accepted as a custom event name.
    """

    BOOT = "boot"
    SHUTDOWN = "shutdown"
    CONFIG_RELOAD = "config_reload"
    SESSION_START = "session_start"
    SESSION_END = "session_end"
    PRE_RUN = "pre_run"
    POST_RUN = "post_run"
    TOOL_START = "tool_start"
    TOOL_END = "tool_end"
    MESSAGE_INBOUND = "message_inbound"
    MESSAGE_OUTBOUND = "message_outbound"
    CHANNEL_CONNECT = "channel_connect"
    CHANNEL_DISCONNECT = "channel_disconnect"
    ERROR = "error"


EventName = Union[HookEvents, str]


def event_name(event: EventName) -> str:
    """Normalise an event to its plain string name."""
    if isinstance(event, HookEvents):
        return event.value
    return event


@dataclass
class HookOutcome:
    """Result a handler may return to steer the current firing.

    abort stops the firing and is handed back to the caller; transform is
    merged into the shared payload before the next handler runs.
    """

    abort: bool = False
    abort_message: str | None = None
    transform: dict[str, Any] | None = None

    @classmethod
    def coerce(cls, value: Any) -> "HookOutcome | None":
        """Accept a HookOutcome, a dict with the same keys, or None."""
        if value is None or isinstance(value, HookOutcome):
            return value
        if isinstance(value, dict):
            return cls(
                abort=bool(value.get("abort", False)),
                abort_message=value.get("abort_message", value.get("abortMessage")),
                transform=value.get("transform"),
            )
        return None


HookResult = Union[HookOutcome, dict, None]
HookHandler = Callable[[str, dict[str, Any]], Union[HookResult, Awaitable[HookResult]]]


@dataclass
class HookRegistration:
    id: str
    event: str
    handler: HookHandler
    priority: int = 0
    sequence: int = 0

    def matches(self, name: str) -> bool:
        return self.event == name or self.event == WILDCARD


@dataclass
class HookStats:
    """Statistics for hook firings."""

    total_firings: int = 0
    firings_by_event: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    last_firing_time: datetime | None = None
    total_handlers_invoked: int = 0
    total_failures: int = 0
    total_timeouts: int = 0
    total_aborts: int = 0
    total_duration_ms: float = 0.0


class HookManager:
    """Registers lifecycle hook handlers and fires events through them.

    One instance owns its registrations; create separate instances for
    isolated pipelines or tests.
    """

    def __init__(self, timeout: float = HOOK_TIMEOUT_SECONDS) -> None:
        self._timeout = timeout
        self._hooks: list[HookRegistration] = []
        self._sequence = itertools.count()
        self._stats = HookStats()
        # Handler tasks no longer awaited by a firing but still running
        self._background: set[asyncio.Task] = set()

    @property
    def timeout(self) -> float:
        return self._timeout

    def register(
        self,
        hook_id: str,
        event: EventName,
        handler: HookHandler,
        priority: int = 0,
    ) -> None:
        """Register a handler for a lifecycle event.

        Re-registering an existing id replaces the earlier registration; the
        replacement sorts after other handlers of equal priority.

        Args:
            hook_id: Unique id of the registration.
            event: Event name, or "*" to receive every event.
            handler: Callable receiving (event, payload); may be async.
            priority: Higher runs first. Ties keep registration order.
        """
        if self._remove(hook_id):
            logger.debug("Replacing hook registration %s", hook_id)
        self._hooks.append(
            HookRegistration(
                id=hook_id,
                event=event_name(event),
                handler=handler,
                priority=priority,
                sequence=next(self._sequence),
            )
        )
        self._hooks.sort(key=lambda h: (-h.priority, h.sequence))
        logger.debug("Registered hook: %s for event %s", hook_id, event_name(event))

    def unregister(self, hook_id: str) -> bool:
        """Remove a registration by id.

        Returns:
            True if it was found and removed, False otherwise.
        """
        if self._remove(hook_id):
            logger.debug("Unregistered hook: %s", hook_id)
            return True
        return False

    def _remove(self, hook_id: str) -> bool:
        for idx, hook in enumerate(self._hooks):
            if hook.id == hook_id:
                del self._hooks[idx]
                return True
        return False

    def on(
        self,
        event: EventName,
        *,
        hook_id: str | None = None,
        priority: int = 0,
    ) -> Callable[[HookHandler], HookHandler]:
        """Decorator to register a hook handler.

        Usage:
            @hook_manager.on(HookEvents.TOOL_START, priority=5)
            async def audit(event, payload):
                logger.info("Tool: %s", payload.get("tool_name"))
        """

        def decorator(handler: HookHandler) -> HookHandler:
            self.register(hook_id or handler.__qualname__, event, handler, priority)
            return handler

        return decorator

    async def fire(
        self,
        event: EventName,
        payload: dict[str, Any] | None = None,
    ) -> HookOutcome | None:
        """Fire a lifecycle event through every matching handler.

        Handlers run one at a time in priority order, so each sees the
        transforms merged by the ones before it. A handler that raises or
        misses its deadline is logged and skipped. A timed-out handler is not
        cancelled; it keeps running in the background.

        Args:
            event: The event being fired.
            payload: Shared mutable payload, updated in place by transforms.

        Returns:
            The aborting handler's outcome, or None if no handler aborted.
        """
        name = event_name(event)
        if payload is None:
            payload = {}
        matching = [h for h in self._hooks if h.matches(name)]

        start_time = time.perf_counter()
        self._stats.total_firings += 1
        self._stats.firings_by_event[name] += 1
        self._stats.last_firing_time = datetime.now(timezone.utc)

        try:
            for hook in matching:
                try:
                    result = await self._invoke(hook, name, payload)
                except HookTimeoutError as e:
                    self._stats.total_timeouts += 1
                    self._stats.total_failures += 1
                    logger.warning(
                        "Hook %s failed for event %s: %s", hook.id, name, e,
                        extra={"hook_id": hook.id, "event": name},
                    )
                    continue
                except Exception as e:
                    self._stats.total_failures += 1
                    logger.warning(
                        "Hook %s failed for event %s: %s", hook.id, name, e,
                        extra={"hook_id": hook.id, "event": name},
                    )
                    continue

                outcome = HookOutcome.coerce(result)
                if outcome is None:
                    continue
                if outcome.abort:
                    self._stats.total_aborts += 1
                    logger.info(
                        "Hook %s aborted event %s", hook.id, name,
                        extra={"hook_id": hook.id, "event": name},
                    )
                    return outcome
                if outcome.transform:
                    payload.update(outcome.transform)
            return None
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._stats.total_duration_ms += duration_ms
            if matching:
                logger.debug(
                    "Fired %s to %d handlers in %.2fms",
                    name,
                    len(matching),
                    duration_ms,
                )

    async def _invoke(
        self, hook: HookRegistration, name: str, payload: dict[str, Any]
    ) -> Any:
        self._stats.total_handlers_invoked += 1
        result = hook.handler(name, payload)
        if not inspect.isawaitable(result):
            return result

        task = asyncio.ensure_future(result)
        try:
            done, _ = await asyncio.wait({task}, timeout=self._timeout)
        except asyncio.CancelledError:
            # Firing cancelled mid-wait: keep a reference to the running handler
            self._track_background(task, hook.id)
            raise

        if task in done:
            if task.cancelled():
                raise HookCancelledError(hook.id)
            return task.result()

        # Deadline passed: leave the task running and stop waiting for it
        self._track_background(task, hook.id)
        raise HookTimeoutError(hook.id, self._timeout)

    def _track_background(self, task: asyncio.Task, hook_id: str) -> None:
        self._background.add(task)
        task.add_done_callback(self._background_done(hook_id))

    def _background_done(self, hook_id: str) -> Callable[[asyncio.Task], None]:
        def callback(task: asyncio.Task) -> None:
            self._background.discard(task)
            if task.cancelled():
                return
            exc = task.exception()
            if exc is not None:
                logger.debug("Abandoned hook %s later failed: %s", hook_id, exc)
            else:
                logger.debug("Abandoned hook %s finished in background", hook_id)

        return callback

    def list_hooks(self, event: EventName | None = None) -> list[dict[str, Any]]:
        """Return registrations in execution order, optionally for one event."""
        hooks = self._hooks
        if event is not None:
            name = event_name(event)
            hooks = [h for h in hooks if h.matches(name)]
        return [{"id": h.id, "event": h.event, "priority": h.priority} for h in hooks]

    def has_hooks(self, event: EventName) -> bool:
        name = event_name(event)
        return any(h.matches(name) for h in self._hooks)

    def get_registered_count(self) -> int:
        """Return total number of registered handlers."""
        return len(self._hooks)

    def get_stats(self) -> dict[str, Any]:
        """Return hook statistics for diagnostics."""
        return {
            "registered_handlers": self.get_registered_count(),
            "total_firings": self._stats.total_firings,
            "firings_by_event": dict(self._stats.firings_by_event),
            "total_handlers_invoked": self._stats.total_handlers_invoked,
            "total_failures": self._stats.total_failures,
            "total_timeouts": self._stats.total_timeouts,
            "total_aborts": self._stats.total_aborts,
            "background_tasks": len(self._background),
            "total_duration_ms": round(self._stats.total_duration_ms, 2),
            "last_firing": (
                self._stats.last_firing_time.isoformat()
                if self._stats.last_firing_time
                else None
            ),
        }

    def clear(self) -> None:
        """Remove all registered handlers. Useful for testing."""
        self._hooks.clear()
        logger.debug("Cleared all hook handlers")
