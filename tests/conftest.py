"""Shared test fixtures and configuration."""

from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Callable

import pytest

from agent_orchestrator.clients.base import BaseProviderAdapter
from agent_orchestrator.orchestrator import Orchestrator
from agent_orchestrator.types import (
    Message,
    MessageRole,
    NormalizedReply,
    Provider,
    UsageStats,
)


class ScriptedAdapter(BaseProviderAdapter):
    """Adapter double that answers from a script instead of the network.

    ``script`` receives the shaped request and returns the reply text, or
    raises to simulate a provider failure. Requests are recorded in order.
    """

    def __init__(
        self,
        provider: Provider = Provider.OPENAI,
        script: Callable[[dict[str, Any]], str] | None = None,
        api_key: str | None = "test-key",
    ):
        self.provider = provider
        self.script = script or (lambda request: f"reply {len(self.requests)}")
        self.requests: list[dict[str, Any]] = []
        super().__init__(api_key=api_key)

    def _create_client(self, api_key: str) -> Any:
        return None

    def _get_supported_option_keys(self) -> set[str]:
        return {"temperature", "max_tokens"}

    def _convert_messages(self, messages: list[Message]) -> dict[str, Any]:
        return {"messages": list(messages)}

    def _send(self, request: dict[str, Any]) -> Any:
        self.requests.append(request)
        return self.script(request)

    def _parse_response(self, response: Any) -> NormalizedReply:
        return NormalizedReply(
            content=response,
            usage=UsageStats(prompt_tokens=3, completion_tokens=2, total_tokens=5),
        )

    @contextmanager
    def _handle_api_errors(self):
        yield


def _last_user_prompt(request: dict[str, Any]) -> str:
    message = request["messages"][-1]
    assert message.role == MessageRole.USER
    return message.content


@pytest.fixture
def make_adapter():
    """Factory for scripted adapters: make_adapter(provider, script=None, api_key="test-key")."""
    return ScriptedAdapter


@pytest.fixture
def last_user_prompt():
    """Returns the user message a scripted adapter received last in a request."""
    return _last_user_prompt


@pytest.fixture
def openai_adapter():
    return ScriptedAdapter(Provider.OPENAI)


@pytest.fixture
def anthropic_adapter():
    return ScriptedAdapter(Provider.ANTHROPIC)


@pytest.fixture
def engine(openai_adapter, anthropic_adapter):
    """Orchestrator wired to scripted adapters with generous quotas."""
    return Orchestrator(
        adapters={
            Provider.OPENAI: openai_adapter,
            Provider.ANTHROPIC: anthropic_adapter,
        },
        rate_limits={Provider.OPENAI: 100, Provider.ANTHROPIC: 100},
    )


@pytest.fixture
def sample_messages():
    """One system message followed by an alternating user/assistant pair."""
    return [
        Message.system("You are a helpful assistant."),
        Message.user("Hello!"),
        Message.assistant("Hi there!"),
    ]


@pytest.fixture
def openai_completion():
    """Canned OpenAI chat completion."""
    return SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(role="assistant", content="The result is 3."),
                finish_reason="stop",
            )
        ],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15),
    )


@pytest.fixture
def anthropic_message():
    """Canned Anthropic message with a single text block."""
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text="The result is 3.")],
        stop_reason="end_turn",
        usage=SimpleNamespace(input_tokens=10, output_tokens=5),
    )
