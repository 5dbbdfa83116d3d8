"""Tests for normalized types and agent memory."""

import dataclasses

import pytest

from agent_orchestrator.agent import Agent, ExecutionResult
from agent_orchestrator.core.memory_manager import MemoryManager
from agent_orchestrator.types import (
    Message,
    MessageRole,
    NormalizedReply,
    Provider,
    UsageStats,
)


class TestProvider:
    """Tests for Provider enum."""

    def test_enum_values(self):
        assert Provider.OPENAI.value == "openai"
        assert Provider.ANTHROPIC.value == "anthropic"

    def test_parse(self):
        assert Provider.parse("openai") is Provider.OPENAI
        assert Provider.parse(Provider.ANTHROPIC) is Provider.ANTHROPIC
        assert Provider.parse("gemini") is None
        assert Provider.parse(None) is None


class TestMessage:
    """Tests for Message dataclass."""

    def test_constructors(self):
        assert Message.system("a").role == MessageRole.SYSTEM
        assert Message.user("b").role == MessageRole.USER
        assert Message.assistant("c").role == MessageRole.ASSISTANT

    def test_to_dict(self):
        assert Message.user("Hello").to_dict() == {"role": "user", "content": "Hello"}

    def test_frozen(self):
        msg = Message.user("Hello")
        with pytest.raises(dataclasses.FrozenInstanceError):
            msg.content = "changed"


class TestUsageStats:
    """Tests for UsageStats dataclass."""

    def test_to_dict_includes_extra_fields(self):
        usage = UsageStats(
            prompt_tokens=10,
            completion_tokens=20,
            total_tokens=30,
            extra={"cache_read_input_tokens": 4},
        )
        assert usage.to_dict() == {
            "cache_read_input_tokens": 4,
            "prompt_tokens": 10,
            "completion_tokens": 20,
            "total_tokens": 30,
        }

    def test_extra_cannot_shadow_core_fields(self):
        usage = UsageStats(1, 2, 3, extra={"total_tokens": 99})
        assert usage.to_dict()["total_tokens"] == 3


class TestNormalizedReply:
    def test_to_message(self):
        reply = NormalizedReply(content="Hi", usage=None)
        assert reply.to_message() == Message.assistant("Hi")


class TestMemoryManager:
    """Tests for bounded agent memory."""

    def test_records_exchanges_in_order(self):
        memory = MemoryManager(cap=10)
        memory.record_exchange(Message.user("q1"), Message.assistant("a1"))
        memory.record_exchange(Message.user("q2"), Message.assistant("a2"))

        assert [m.content for m in memory] == ["q1", "a1", "q2", "a2"]
        assert memory.get_history()[0] == {"role": "user", "content": "q1"}

    def test_evicts_whole_exchanges_past_cap(self):
        memory = MemoryManager(cap=4)
        for i in range(1, 4):
            memory.record_exchange(Message.user(f"q{i}"), Message.assistant(f"a{i}"))

        assert len(memory) == 4
        assert [m.content for m in memory] == ["q2", "a2", "q3", "a3"]
        assert memory.messages[0].role == MessageRole.USER

    def test_messages_is_a_copy(self):
        memory = MemoryManager()
        memory.messages.append(Message.user("stray"))
        assert len(memory) == 0

    def test_clear(self):
        memory = MemoryManager()
        memory.record_exchange(Message.user("q"), Message.assistant("a"))
        memory.clear()
        assert len(memory) == 0

    @pytest.mark.parametrize("cap", [0, -2, 1, 3, 21])
    def test_invalid_cap(self, cap):
        with pytest.raises(ValueError, match="positive even"):
            MemoryManager(cap=cap)


class TestAgent:
    def test_agents_with_same_fields_are_distinct(self):
        a = Agent(name="A", role="R", provider=Provider.OPENAI, model="m", instructions="i")
        b = Agent(name="A", role="R", provider=Provider.OPENAI, model="m", instructions="i")

        assert a.id != b.id
        assert a != b
        assert a.memory is not b.memory

    def test_to_dict(self):
        agent = Agent(
            name="Planner",
            role="Lead",
            provider=Provider.ANTHROPIC,
            model="claude",
            instructions="Plan.",
            memory_cap=4,
        )
        agent.memory.record_exchange(Message.user("q"), Message.assistant("a"))

        data = agent.to_dict()
        assert data["provider"] == "anthropic"
        assert data["memory"] == [
            {"role": "user", "content": "q"},
            {"role": "assistant", "content": "a"},
        ]
        assert agent.memory.cap == 4

    def test_execution_result_without_usage(self):
        agent = Agent(name="A", role="R", provider=Provider.OPENAI, model="m", instructions="i")
        result = ExecutionResult(agent=agent.summary, response="ok")

        assert result.to_dict()["usage"] is None
