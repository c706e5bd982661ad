"""Tests for switchboard/routing: agent bindings and session keys."""

import pytest

from switchboard.config import AssistantConfig
from switchboard.routing.bindings import resolve_agent_binding, resolve_agent_for_channel
from switchboard.routing.session_keys import build_session_key, parse_session_key


def make_config(bindings=None) -> AssistantConfig:
    if bindings is None:
        return AssistantConfig()
    return AssistantConfig.model_validate({"multiAgent": {"enabled": True, "bindings": bindings}})


# --------------------------------------------------------------------------- #
# Session keys                                                                 #
# --------------------------------------------------------------------------- #

def test_build_session_key():
    assert build_session_key("agent1", "telegram", "default", "user123") == "agent1:telegram:default:user123"


def test_parse_full_key():
    key = parse_session_key("agent1:telegram:default:user123")
    assert key.agent_id == "agent1"
    assert key.channel_id == "telegram"
    assert key.account_id == "default"
    assert key.peer_id == "user123"
    assert key.raw == "agent1:telegram:default:user123"


def test_parse_keeps_colons_in_peer():
    key = parse_session_key("a:slack:default:C123:thread9")
    assert key.peer_id == "C123:thread9"
    assert build_session_key(key.agent_id, key.channel_id, key.account_id, key.peer_id) == key.raw


def test_parse_two_part_key():
    key = parse_session_key("agent1:telegram")
    assert key.agent_id == "agent1"
    assert key.channel_id == "telegram"
    assert key.account_id is None
    assert key.peer_id is None


def test_parse_simple_name():
    key = parse_session_key("my-session")
    assert key.agent_id is None
    assert key.channel_id is None
    assert key.raw == "my-session"


# --------------------------------------------------------------------------- #
# Bindings                                                                     #
# --------------------------------------------------------------------------- #

def test_resolve_agent_for_channel_matches_rules():
    config = make_config([
        {"agentId": "support-bot", "match": {"channel": "telegram"}},
        {"agentId": "dev-bot", "match": {"channel": "discord"}},
    ])
    assert resolve_agent_for_channel(config, "telegram") == "support-bot"
    assert resolve_agent_for_channel(config, "discord") == "dev-bot"
    assert resolve_agent_for_channel(config, "slack") is None


def test_resolve_agent_for_channel_without_bindings():
    assert resolve_agent_for_channel(make_config(), "telegram") is None


def test_account_and_peer_constraints():
    config = make_config([
        {"agentId": "vip", "match": {"channel": "telegram", "peer": "boss"}},
        {"agentId": "work", "match": {"channel": "telegram", "account": "work"}},
        {"agentId": "fallback", "match": {"channel": "telegram"}},
    ])
    assert resolve_agent_for_channel(config, "telegram", "main", "boss") == "vip"
    assert resolve_agent_for_channel(config, "telegram", "work", "someone") == "work"
    assert resolve_agent_for_channel(config, "telegram", None, None) == "fallback"


def test_binding_defaults_when_no_rule_matches():
    binding = resolve_agent_binding(make_config(), "discord", "main", "peer456")
    assert binding.agent_id == "default"
    assert binding.session_key == "default:discord:main:peer456"


def test_binding_fills_missing_account_and_peer():
    binding = resolve_agent_binding(make_config(), "telegram")
    assert binding.session_key == "default:telegram:default:default"


def test_binding_keeps_empty_account_and_peer():
    binding = resolve_agent_binding(make_config(), "slack", "", "")
    assert binding.session_key == "default:slack::"


def test_binding_uses_matched_agent():
    config = make_config([{"agentId": "support-bot", "match": {"channel": "telegram"}}])
    binding = resolve_agent_binding(config, "telegram", None, "user1")
    assert binding.agent_id == "support-bot"
    assert binding.session_key == "support-bot:telegram:default:user1"


@pytest.mark.parametrize("account,peer", [("main", "p1"), (None, "p2"), ("acct", None)])
def test_binding_key_round_trips(account, peer):
    binding = resolve_agent_binding(make_config(), "slack", account, peer)
    key = parse_session_key(binding.session_key)
    assert key.agent_id == binding.agent_id
    assert key.channel_id == "slack"
    assert key.account_id == (account or "default")
    assert key.peer_id == (peer or "default")
