"""Agent creation, lookup, and execution.

The registry is the sole owner of agents. It is an explicit service object
rather than a module-level map, so several independent registries can
coexist (one per Orchestrator).
"""

import threading
from typing import Any, Mapping

from .agent import (
    DEFAULT_AGENT_NAME,
    DEFAULT_AGENT_ROLE,
    DEFAULT_INSTRUCTIONS,
    Agent,
    ExecutionResult,
)
from .clients.factory import get_default_model
from .core.gateway import APIGateway
from .core.memory_manager import DEFAULT_MEMORY_CAP, check_memory_cap
from .core.prompt_builder import build_agent_messages
from .exceptions import AgentNotFoundError
from .logging import get_logger
from .types import DEFAULT_PROVIDER, Message, Provider

logger = get_logger(__name__)


class AgentRegistry:
    """Creates, looks up, and runs agents."""

    def __init__(self, gateway: APIGateway, memory_cap: int = DEFAULT_MEMORY_CAP):
        """Initialize an empty registry.

        Args:
            gateway: Gateway used for every agent call
            memory_cap: Memory capacity given to new agents, a positive even number

        Raises:
            ValueError: If memory_cap is odd or not positive
        """
        self.gateway = gateway
        self.memory_cap = check_memory_cap(memory_cap)
        self._agents: dict[str, Agent] = {}
        self._lock = threading.Lock()

    def create_agent(self, config: Mapping[str, Any] | None = None) -> Agent:
        """Create and register an agent.

        Missing or empty fields take defaults. An unknown provider falls back
        to the default provider with a warning rather than failing.

        Args:
            config: Optional mapping with name, role, provider, model, instructions

        Returns:
            The new agent
        """
        config = config or {}

        requested_provider = config.get("provider")
        provider = Provider.parse(requested_provider) if requested_provider else None
        if provider is None:
            if requested_provider:
                logger.warning(
                    f"unknown provider {requested_provider!r}, "
                    f"falling back to {DEFAULT_PROVIDER.value}"
                )
            provider = DEFAULT_PROVIDER

        agent = Agent(
            name=config.get("name") or DEFAULT_AGENT_NAME,
            role=config.get("role") or DEFAULT_AGENT_ROLE,
            provider=provider,
            model=config.get("model") or get_default_model(provider),
            instructions=config.get("instructions") or DEFAULT_INSTRUCTIONS,
            memory_cap=self.memory_cap,
        )

        with self._lock:
            self._agents[agent.id] = agent

        logger.info(f"created agent {agent.name} ({agent.id}) on {provider.value}/{agent.model}")
        return agent

    def get_agent(self, agent_id: str) -> Agent:
        """Look up an agent.

        Raises:
            AgentNotFoundError: If no agent has this id
        """
        with self._lock:
            agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    def list_agents(self) -> list[Agent]:
        """All agents in creation order."""
        with self._lock:
            return list(self._agents.values())

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def execute_agent(
        self,
        agent_id: str,
        message: str,
        options: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        """Run one exchange with an agent.

        The call context is the agent's instructions, then its memory, then
        the new message. On success the user message and the reply are
        recorded together; on failure memory is left exactly as it was.
        Calls against the same agent are serialized.

        Args:
            agent_id: Agent identifier
            message: User message text
            options: Optional provider call options

        Returns:
            ExecutionResult with the agent summary, response text, and usage

        Raises:
            AgentNotFoundError: If no agent has this id
            RateLimitError, ConfigurationError, ProviderError: From the gateway
        """
        agent = self.get_agent(agent_id)

        with agent.lock:
            messages = build_agent_messages(agent.instructions, agent.memory, message)
            reply = self.gateway.call(agent.provider, messages, agent.model, options)
            agent.memory.record_exchange(Message.user(message), reply.to_message())

        logger.debug(f"agent {agent.name} ({agent.id}) replied, memory={len(agent.memory)}")
        return ExecutionResult(agent=agent.summary, response=reply.content, usage=reply.usage)
