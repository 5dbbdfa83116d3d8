"""Provider adapter implementations.

All adapters implement the BaseProviderAdapter interface and normalize
provider-specific replies to NormalizedReply.
"""

from .anthropic import AnthropicAdapter
from .base import BaseProviderAdapter
from .factory import create_adapter, get_available_providers, get_default_model
from .openai import OpenAIAdapter

__all__ = [
    "BaseProviderAdapter",
    "OpenAIAdapter",
    "AnthropicAdapter",
    "create_adapter",
    "get_available_providers",
    "get_default_model",
]
