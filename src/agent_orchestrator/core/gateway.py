"""Single entry point for provider calls.

The gateway selects the adapter for a requested provider, enforces the
rate limiter, and counts failures. It never retries and never substitutes
one provider for another: an agent's provider choice is explicit.
"""

import threading
from dataclasses import dataclass
from typing import Any

from ..clients.base import BaseProviderAdapter
from ..exceptions import ConfigurationError, RateLimitError, UnsupportedProviderError
from ..logging import get_logger
from ..types import Message, NormalizedReply, Provider
from .rate_limiter import RateLimiter

logger = get_logger(__name__)


@dataclass
class GatewayMetrics:
    """Counters exposed through the stats endpoint."""
    openai_requests: int = 0
    anthropic_requests: int = 0
    errors: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "openaiRequests": self.openai_requests,
            "anthropicRequests": self.anthropic_requests,
            "errors": self.errors,
        }


class APIGateway:
    """Routes normalized calls to provider adapters.

    Every call passes these gates in order, each one final:
    1. provider must be supported
    2. provider must have a credential (checked before the limiter)
    3. the rate limiter must admit the request
    4. the adapter performs the call

    Any failure increments the error counter and is re-raised unchanged.
    """

    def __init__(
        self,
        adapters: dict[Provider, BaseProviderAdapter],
        rate_limiter: RateLimiter,
    ):
        """Initialize the gateway.

        Args:
            adapters: One adapter per supported provider
            rate_limiter: Limiter with a window for every adapter's provider
        """
        self.adapters = adapters
        self.rate_limiter = rate_limiter
        self._errors = 0
        self._errors_lock = threading.Lock()

    def call(
        self,
        provider: Provider | str,
        messages: list[Message],
        model: str,
        options: dict[str, Any] | None = None,
    ) -> NormalizedReply:
        """Send messages to the given provider.

        Args:
            provider: Provider identifier
            messages: Normalized conversation
            model: Provider model name
            options: Optional call options forwarded to the adapter

        Returns:
            NormalizedReply from the adapter

        Raises:
            UnsupportedProviderError: Unknown provider
            ConfigurationError: Provider has no credential
            RateLimitError: Provider quota exhausted for this window
            ProviderError: Upstream call failed
        """
        try:
            resolved = Provider.parse(provider)
            if resolved is None or resolved not in self.adapters:
                raise UnsupportedProviderError(provider)

            adapter = self.adapters[resolved]
            if not adapter.is_configured:
                raise ConfigurationError(resolved.value)

            if not self.rate_limiter.check_and_reserve(resolved):
                raise RateLimitError(
                    resolved.value,
                    retry_after=self.rate_limiter.retry_after(resolved),
                )

            return adapter.invoke(messages, model, options)
        except Exception as e:
            with self._errors_lock:
                self._errors += 1
            logger.warning(f"provider call to {provider} failed: {e}")
            raise

    def providers_configured(self) -> dict[str, bool]:
        """Which providers have a credential."""
        return {
            provider.value: adapter.is_configured
            for provider, adapter in self.adapters.items()
        }

    @property
    def metrics(self) -> GatewayMetrics:
        """Snapshot of request and error counters."""
        openai = self.adapters.get(Provider.OPENAI)
        anthropic = self.adapters.get(Provider.ANTHROPIC)
        return GatewayMetrics(
            openai_requests=openai.request_count if openai else 0,
            anthropic_requests=anthropic.request_count if anthropic else 0,
            errors=self._errors,
        )
