"""Factory for creating provider adapters.

This module provides a centralized way to create adapters based on provider
name, using a registry that also records each provider's default model.
"""

from typing import Any

from ..exceptions import UnsupportedProviderError
from ..types import Provider
from .anthropic import DEFAULT_MODEL as ANTHROPIC_DEFAULT_MODEL
from .anthropic import AnthropicAdapter
from .base import DEFAULT_TIMEOUT, BaseProviderAdapter
from .openai import DEFAULT_MODEL as OPENAI_DEFAULT_MODEL
from .openai import OpenAIAdapter

# registry of provider configurations
_PROVIDER_REGISTRY: dict[Provider, dict[str, Any]] = {
    Provider.OPENAI: {
        "adapter_class": OpenAIAdapter,
        "default_model": OPENAI_DEFAULT_MODEL,
    },
    Provider.ANTHROPIC: {
        "adapter_class": AnthropicAdapter,
        "default_model": ANTHROPIC_DEFAULT_MODEL,
    },
}


def get_available_providers() -> list[str]:
    """Get list of available provider names."""
    return [provider.value for provider in _PROVIDER_REGISTRY]


def _resolve(provider: Provider | str) -> Provider:
    resolved = Provider.parse(provider)
    if resolved is None:
        raise UnsupportedProviderError(provider)
    return resolved


def get_default_model(provider: Provider | str) -> str:
    """Get the default model for a provider.

    Raises:
        UnsupportedProviderError: If provider is unknown.
    """
    return _PROVIDER_REGISTRY[_resolve(provider)]["default_model"]


def create_adapter(
    provider: Provider | str,
    api_key: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> BaseProviderAdapter:
    """Create an adapter for the specified provider.

    A missing api_key is not an error here: the adapter is created
    unconfigured and raises ConfigurationError when invoked.

    Args:
        provider: The provider name (openai, anthropic).
        api_key: Optional API key.
        timeout: Per-request timeout in seconds.

    Returns:
        An adapter instance.

    Raises:
        UnsupportedProviderError: If provider is unknown.
    """
    adapter_class = _PROVIDER_REGISTRY[_resolve(provider)]["adapter_class"]
    return adapter_class(api_key=api_key, timeout=timeout)
