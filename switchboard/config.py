"""
Central configuration for switchboard.

Two layers:
  * Settings: process settings from environment variables / .env
    (pydantic-settings), e.g. log level and data directory.
  * AssistantConfig: the declarative assistant configuration (agent profile,
    hook mappings, multi-agent definitions and channel bindings), loaded from
    a JSON file. Keys may be written in camelCase or snake_case.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# Resolve .env relative to this file (switchboard/config.py → project root)
_ENV_FILE = Path(__file__).parent.parent / ".env"


def _load_env_file() -> None:
    """
    Load .env into os.environ, but only for keys that are currently unset
    or set to empty strings. Explicit non-empty shell values still win.
    """
    if not _ENV_FILE.exists():
        return
    from dotenv import dotenv_values
    for key, value in dotenv_values(_ENV_FILE).items():
        if value and not os.environ.get(key):
            os.environ[key] = value


# Run at import time so Settings() sees the correct values
_load_env_file()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    data_dir: str = "./data"
    config_path: str = "config/switchboard.json"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # ── Hooks ───────────────────────────────────────────────────────────────────
    hook_timeout_seconds: float = 5.0

    @property
    def logs_dir(self) -> str:
        return os.path.join(self.data_dir, "logs")

    @property
    def summaries_file(self) -> str:
        return os.path.join(self.data_dir, "session_summaries.jsonl")


def get_settings() -> "Settings":
    """Return the application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


_settings: Settings | None = None


class _SettingsProxy:
    """Lazy proxy so `from switchboard.config import settings` works without eager init."""
    def __getattr__(self, name):
        return getattr(get_settings(), name)


settings = _SettingsProxy()  # type: ignore[assignment]


# --------------------------------------------------------------------------- #
# Assistant configuration                                                      #
# --------------------------------------------------------------------------- #

class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AgentProfile(_ConfigModel):
    provider: str = "anthropic"
    model: str = "claude-sonnet-4-5-20250929"
    thinking_level: Literal["off", "low", "medium", "high"] = "off"


class HookMapping(_ConfigModel):
    """Declarative rule: when `match` fires, log `action` and apply overrides."""

    match: str = ""
    action: str = ""
    model: Optional[str] = None
    channel: Optional[str] = None


class HooksConfig(_ConfigModel):
    enabled: bool = True
    mappings: list[HookMapping] = Field(default_factory=list)


class AgentDefinition(_ConfigModel):
    id: str
    model: Optional[str] = None


class BindingMatch(_ConfigModel):
    channel: str
    account: Optional[str] = None
    peer: Optional[str] = None


class AgentBindingRule(_ConfigModel):
    agent_id: str
    match: BindingMatch


class MultiAgentConfig(_ConfigModel):
    enabled: bool = True
    agents: list[AgentDefinition] = Field(default_factory=list)
    bindings: list[AgentBindingRule] = Field(default_factory=list)

    def find_agent(self, agent_id: str) -> AgentDefinition | None:
        for agent in self.agents:
            if agent.id == agent_id:
                return agent
        return None


class AssistantConfig(_ConfigModel):
    agent: AgentProfile = Field(default_factory=AgentProfile)
    hooks: HooksConfig = Field(default_factory=HooksConfig)
    multi_agent: MultiAgentConfig = Field(default_factory=MultiAgentConfig)


def load_assistant_config(path: str | os.PathLike) -> AssistantConfig:
    """
    Load the assistant configuration from a JSON file.

    A missing file yields the defaults. Malformed JSON or a schema violation
    raises ConfigError.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.info("No config file at %s, using defaults", path)
        return AssistantConfig()
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    try:
        config = AssistantConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config
