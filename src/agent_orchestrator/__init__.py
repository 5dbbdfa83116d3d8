"""Dual-Provider Agent Orchestrator.

This package coordinates stateful agent conversations against OpenAI and
Anthropic through one normalized interface, with per-provider rate limiting
and round-robin multi-agent collaboration.
"""

from .agent import Agent, AgentSummary, ExecutionResult
from .collaboration import (
    CollaborationCoordinator,
    CollaborationRun,
    TurnFailure,
    TurnRecord,
    TurnSuccess,
)
from .exceptions import (
    AgentNotFoundError,
    ConfigurationError,
    OrchestratorError,
    ProviderError,
    RateLimitError,
    UnsupportedProviderError,
)
from .orchestrator import Orchestrator
from .registry import AgentRegistry
from .types import Message, MessageRole, NormalizedReply, Provider, UsageStats

__all__ = [
    # engine
    "Orchestrator",
    "AgentRegistry",
    "CollaborationCoordinator",
    # types
    "Agent",
    "AgentSummary",
    "CollaborationRun",
    "ExecutionResult",
    "Message",
    "MessageRole",
    "NormalizedReply",
    "Provider",
    "TurnFailure",
    "TurnRecord",
    "TurnSuccess",
    "UsageStats",
    # exceptions
    "AgentNotFoundError",
    "ConfigurationError",
    "OrchestratorError",
    "ProviderError",
    "RateLimitError",
    "UnsupportedProviderError",
]
