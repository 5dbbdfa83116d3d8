"""Engine facade.

The Orchestrator wires adapters, rate limiter, gateway, registry, and
coordinator together and exposes the engine's public operations. Each
instance owns its own state; nothing here is a process-wide singleton.
"""

import time
from typing import Any, Mapping, Sequence

from .agent import Agent, ExecutionResult
from .clients.base import BaseProviderAdapter
from .clients.factory import create_adapter
from .collaboration import DEFAULT_ITERATIONS, CollaborationCoordinator, CollaborationRun
from .config import Settings
from .core.gateway import APIGateway
from .core.memory_manager import DEFAULT_MEMORY_CAP
from .core.rate_limiter import RateLimiter
from .registry import AgentRegistry
from .types import Provider

VERSION = "0.1.0"


class Orchestrator:
    """Dual-provider multi-agent engine."""

    def __init__(
        self,
        adapters: dict[Provider, BaseProviderAdapter],
        rate_limits: dict[Provider, int],
        memory_cap: int = DEFAULT_MEMORY_CAP,
        rate_limiter: RateLimiter | None = None,
    ):
        """Initialize the engine.

        Args:
            adapters: One adapter per provider
            rate_limits: Requests per minute, keyed by provider
            memory_cap: Memory capacity for new agents
            rate_limiter: Prebuilt limiter (overrides rate_limits, mainly for tests)
        """
        self.rate_limiter = rate_limiter or RateLimiter(rate_limits)
        self.gateway = APIGateway(adapters, self.rate_limiter)
        self.registry = AgentRegistry(self.gateway, memory_cap=memory_cap)
        self.coordinator = CollaborationCoordinator(self.registry)
        self.started_at = time.time()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Orchestrator":
        """Build an engine from loaded settings."""
        adapters = {
            provider: create_adapter(
                provider,
                api_key=settings.get_api_key_for_provider(provider.value),
                timeout=settings.request_timeout,
            )
            for provider in Provider
        }
        rate_limits = {
            provider: settings.get_rate_limit_for_provider(provider.value)
            for provider in Provider
        }
        return cls(adapters, rate_limits, memory_cap=settings.memory_cap)

    # ==================== engine operations ====================

    def create_agent(self, config: Mapping[str, Any] | None = None) -> Agent:
        return self.registry.create_agent(config)

    def list_agents(self) -> list[Agent]:
        return self.registry.list_agents()

    def execute_agent(
        self,
        agent_id: str,
        message: str,
        options: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        return self.registry.execute_agent(agent_id, message, options)

    def collaborate(
        self,
        agent_ids: Sequence[str],
        goal: str,
        iterations: int = DEFAULT_ITERATIONS,
    ) -> CollaborationRun:
        return self.coordinator.collaborate(agent_ids, goal, iterations)

    # ==================== reporting ====================

    def health(self) -> dict[str, Any]:
        """Liveness report with provider configuration."""
        return {
            "status": "healthy",
            "uptime": time.time() - self.started_at,
            "timestamp": time.time(),
            "version": VERSION,
            "providers": self.gateway.providers_configured(),
        }

    def stats(self) -> dict[str, Any]:
        """Request counters and rate-limit windows."""
        return {
            **self.gateway.metrics.to_dict(),
            "agents": len(self.registry),
            "uptime": time.time() - self.started_at,
            "rateLimits": self.rate_limiter.snapshot(),
        }
