"""Tests for switchboard/agents/registry.py"""

from switchboard.agents.registry import AgentEntry, AgentRegistry


def test_empty_registry():
    registry = AgentRegistry()
    assert len(registry) == 0
    assert registry.list_agents() == []
    assert registry.get("x") is None
    assert "x" not in registry


def test_list_agents_is_snapshot_in_insertion_order():
    registry = AgentRegistry()
    registry.add(AgentEntry(id="b", session=object()))
    registry.add(AgentEntry(id="a", session=object(), spawner_agent_id="b"))

    snapshot = registry.list_agents()
    registry.remove("b")

    assert [info.id for info in snapshot] == ["b", "a"]
    assert snapshot[1].spawner == "b"
    assert [info.id for info in registry.list_agents()] == ["a"]


def test_remove_returns_whether_present():
    registry = AgentRegistry()
    registry.add(AgentEntry(id="a", session=object()))
    assert registry.remove("a") is True
    assert registry.remove("a") is False


def test_clear_returns_prior_count():
    registry = AgentRegistry()
    for agent_id in ("a", "b", "c"):
        registry.add(AgentEntry(id=agent_id, session=object()))
    assert registry.clear() == 3
    assert len(registry) == 0


def test_registries_are_independent():
    first, second = AgentRegistry(), AgentRegistry()
    first.add(AgentEntry(id="a", session=object()))
    assert "a" in first
    assert "a" not in second
