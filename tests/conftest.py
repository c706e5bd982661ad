"""Shared fixtures for switchboard tests."""

import asyncio
import logging
from typing import Any

import pytest

from switchboard.agents.engine import AgentRunResult, SessionEngine, SessionParams
from switchboard.hooks.lifecycle import HookManager


class FakeEngine(SessionEngine):
    """Session engine that records calls and echoes prompts back."""

    def __init__(self, reply: str = "ok") -> None:
        self.reply = reply
        self.created: list[SessionParams] = []
        self.runs: list[tuple[Any, str, str, str]] = []
        self.fail_create: Exception | None = None
        self.fail_run: Exception | None = None
        # When set, run_agent waits on it before returning
        self.gate: asyncio.Event | None = None
        # Seconds create_session sleeps before returning
        self.create_delay = 0.0

    async def create_session(self, params: SessionParams) -> Any:
        if self.create_delay:
            await asyncio.sleep(self.create_delay)
        if self.fail_create is not None:
            raise self.fail_create
        self.created.append(params)
        return {"name": params.session_name}

    async def run_agent(self, session, prompt, *, session_name, workspace_dir) -> AgentRunResult:
        self.runs.append((session, prompt, session_name, workspace_dir))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_run is not None:
            raise self.fail_run
        return AgentRunResult(text=f"{self.reply}: {prompt}")


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def hook_manager():
    return HookManager()


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch, tmp_path):
    """Prevent tests from reading a real .env or touching real data."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "switchboard.json"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    # Drop any settings singleton built under another test's environment
    monkeypatch.setattr("switchboard.config._settings", None)


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging's changes to the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
