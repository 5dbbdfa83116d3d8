"""Normalized types for the orchestrator.

These types provide a provider-agnostic interface for LLM interactions.
Both provider adapters convert their request/response shapes to and from
these types, so downstream code never branches on provider identity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Provider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @classmethod
    def parse(cls, value: Any) -> "Provider | None":
        """Return the matching provider, or None if value is not one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_PROVIDER = Provider.OPENAI


class MessageRole(str, Enum):
    """Role of a message in the conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in a conversation.

    Ordering within a list is significant. SYSTEM messages are always
    logically first and are merged or extracted by each adapter.
    """
    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the wire dictionary representation."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(MessageRole.SYSTEM, content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(MessageRole.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(MessageRole.ASSISTANT, content)


@dataclass
class UsageStats:
    """Token usage statistics.

    Attributes:
        prompt_tokens: Tokens consumed by the request
        completion_tokens: Tokens generated in the reply
        total_tokens: Sum of the two
        extra: Provider-specific usage fields, passed through untouched
    """
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass
class NormalizedReply:
    """Reply from an LLM provider in the common shape.

    Attributes:
        content: Assistant text
        usage: Token usage statistics (optional)
    """
    content: str
    usage: UsageStats | None = None

    def to_message(self) -> Message:
        return Message.assistant(self.content)
