"""Agent model.

An Agent is one conversational participant: an identity, a role, a
provider/model choice, system instructions, and a bounded ordered memory.
Agents are owned by the AgentRegistry; only the registry's execute
operation mutates their memory.
"""

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from .core.memory_manager import DEFAULT_MEMORY_CAP, MemoryManager
from .types import Provider, UsageStats

DEFAULT_AGENT_NAME = "Agent"
DEFAULT_AGENT_ROLE = "Assistant"
DEFAULT_INSTRUCTIONS = "You are a helpful AI assistant."


@dataclass(frozen=True)
class AgentSummary:
    """Public identity of an agent, as reported in results."""
    id: str
    name: str
    role: str
    provider: Provider

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "provider": self.provider.value,
        }


@dataclass(eq=False)
class Agent:
    """A conversational participant with bounded memory.

    Attributes:
        id: Unique identifier, immutable for the process lifetime
        name: Display name used in collaboration digests
        role: Free-form role label
        provider: Provider this agent always calls
        model: Provider model name
        instructions: System instructions sent first on every call
        memory: Bounded FIFO of past exchanges
        created_at: Creation time in epoch seconds
    """
    name: str
    role: str
    provider: Provider
    model: str
    instructions: str
    memory_cap: int = DEFAULT_MEMORY_CAP
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)
    memory: MemoryManager = field(init=False, repr=False)
    lock: threading.Lock = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.memory = MemoryManager(self.memory_cap)
        self.lock = threading.Lock()

    @property
    def summary(self) -> AgentSummary:
        return AgentSummary(
            id=self.id,
            name=self.name,
            role=self.role,
            provider=self.provider,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        return {
            **self.summary.to_dict(),
            "model": self.model,
            "instructions": self.instructions,
            "memory": self.memory.get_history(),
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a single successful agent execution."""
    agent: AgentSummary
    response: str
    usage: UsageStats | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "agent": self.agent.to_dict(),
            "response": self.response,
            "usage": self.usage.to_dict() if self.usage else None,
        }
