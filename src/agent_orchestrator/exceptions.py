"""Custom exception hierarchy for the orchestrator.

This module defines all custom exceptions used throughout the engine,
organized into logical categories: configuration errors, provider errors,
and agent lookup errors.
"""


class OrchestratorError(Exception):
    """Base exception for all orchestrator errors."""


# =============================================================================
# Configuration Errors - Issues with setup, detected before any network call
# =============================================================================

class ConfigurationError(OrchestratorError):
    """A provider credential is missing.

    Fatal to that provider only; the other provider remains usable.
    """

    def __init__(self, provider: str, message: str | None = None):
        self.provider = provider
        super().__init__(message or f"{provider} API key not configured")


class UnsupportedProviderError(OrchestratorError):
    """Caller requested a provider that is not supported."""

    def __init__(self, provider: object):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")


# =============================================================================
# Provider Errors - Issues with LLM API interactions
# =============================================================================

class RateLimitError(OrchestratorError):
    """Per-provider request quota for the current window is exhausted.

    The engine never retries; callers should back off and try again later.
    """

    def __init__(self, provider: str, retry_after: float | None = None):
        self.provider = provider
        self.retry_after = retry_after
        message = f"{provider} rate limit exceeded"
        if retry_after:
            message = f"{message}. Retry after: {retry_after:.0f}s"
        super().__init__(message)


class ProviderError(OrchestratorError):
    """Upstream provider call failed.

    Attributes:
        provider: Provider that produced the failure
        status_code: HTTP status code, if the provider answered at all
        status_text: HTTP reason phrase, if known
    """

    def __init__(
        self,
        provider: str,
        status_code: int | None = None,
        status_text: str | None = None,
        message: str | None = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.status_text = status_text
        if message is None:
            message = f"{provider} API error: {status_code} {status_text or ''}".rstrip()
        super().__init__(message)


class ProviderUnavailableError(ProviderError):
    """Provider could not be reached (connection failure or timeout)."""

    def __init__(self, provider: str, cause: Exception | str):
        self.cause = cause
        super().__init__(provider, message=f"{provider} API unavailable: {cause}")


class InvalidResponseError(ProviderError):
    """Response from provider could not be parsed."""

    def __init__(self, provider: str, cause: Exception | str):
        self.cause = cause
        super().__init__(provider, message=f"Failed to parse {provider} response: {cause}")


# =============================================================================
# Agent Errors
# =============================================================================

class AgentNotFoundError(OrchestratorError):
    """No agent is registered under the given identifier."""

    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__(f"Agent not found: {agent_id}")
