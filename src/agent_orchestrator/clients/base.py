"""Base class for provider adapters.

Both provider adapters inherit from BaseProviderAdapter and implement the
request-shaping and reply-normalization methods that convert between the
provider-specific formats and the normalized types.
"""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator

from ..exceptions import ConfigurationError
from ..logging import get_logger
from ..types import Message, NormalizedReply, Provider

logger = get_logger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TIMEOUT = 60.0

# keys that belong to the adapter, never to caller options
RESERVED_REQUEST_KEYS = frozenset({"model", "messages", "system", "stream"})

# camelCase spellings accepted from streaming clients
OPTION_ALIASES = {
    "maxTokens": "max_tokens",
    "topP": "top_p",
    "topK": "top_k",
}


class BaseProviderAdapter(ABC):
    """Abstract base class for provider adapters.

    Each adapter is responsible for:
    1. Converting a normalized message list to the provider's request shape
    2. Making the API call
    3. Converting the reply back to a NormalizedReply

    The gateway only interacts with the normalized types. All provider-specific
    handling is encapsulated within each adapter.
    """

    provider: Provider

    def __init__(self, api_key: str | None = None, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the adapter.

        The SDK client is created only when a credential is present, so an
        unconfigured adapter never reaches the network.

        Args:
            api_key: API key for the provider. None leaves the adapter unconfigured.
            timeout: Per-request timeout in seconds passed to the SDK client.
        """
        self.api_key = api_key
        self.timeout = timeout
        self.request_count = 0
        self._count_lock = threading.Lock()
        self.client = self._create_client(api_key) if api_key else None

    @property
    def is_configured(self) -> bool:
        """Whether a credential is available for this provider."""
        return bool(self.api_key)

    @abstractmethod
    def _create_client(self, api_key: str) -> Any:
        """Create the provider's SDK client instance."""

    @abstractmethod
    def _get_supported_option_keys(self) -> set[str]:
        """Return option keys the SDK accepts as keyword arguments.

        Any other caller option is forwarded through ``extra_body``.
        """

    @abstractmethod
    def _convert_messages(self, messages: list[Message]) -> dict[str, Any]:
        """Convert normalized messages to the provider's request fields.

        Returns:
            Dict merged into the request (e.g. ``messages`` and ``system``)
        """

    @abstractmethod
    def _send(self, request: dict[str, Any]) -> Any:
        """Perform the API call with the shaped request."""

    @abstractmethod
    def _parse_response(self, response: Any) -> NormalizedReply:
        """Parse the provider reply into the normalized shape."""

    @abstractmethod
    @contextmanager
    def _handle_api_errors(self) -> Iterator[None]:
        """Context manager mapping SDK exceptions onto ProviderError types."""

    # ==================== shared implementations ====================

    def invoke(
        self,
        messages: list[Message],
        model: str,
        options: dict[str, Any] | None = None,
    ) -> NormalizedReply:
        """Send a normalized conversation to the provider.

        Args:
            messages: Conversation in normalized order
            model: Provider model name
            options: Optional call options (temperature, max_tokens, pass-through)

        Returns:
            NormalizedReply with content and usage

        Raises:
            ConfigurationError: If no credential is configured
            ProviderError: If the provider call fails or its reply cannot be parsed
        """
        if not self.is_configured:
            raise ConfigurationError(self.provider.value)

        request = self.build_request(messages, model, options)
        logger.debug(
            f"calling {self.provider.value} model={model} messages={len(messages)}"
        )

        with self._handle_api_errors():
            response = self._send(request)
        reply = self._parse_response(response)

        with self._count_lock:
            self.request_count += 1
        return reply

    def build_request(
        self,
        messages: list[Message],
        model: str,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build the provider request: defaults first, caller options on top."""
        request: dict[str, Any] = {
            "model": model,
            **self._convert_messages(messages),
            "temperature": DEFAULT_TEMPERATURE,
            "max_tokens": DEFAULT_MAX_TOKENS,
        }

        supported = self._get_supported_option_keys()
        extra_body: dict[str, Any] = {}
        for key, value in normalize_options(options).items():
            if key in RESERVED_REQUEST_KEYS:
                logger.warning(f"ignoring reserved option '{key}' for {self.provider.value}")
            elif key in supported:
                request[key] = value
            else:
                extra_body[key] = value

        if extra_body:
            request["extra_body"] = extra_body
        return request


def normalize_options(options: dict[str, Any] | None) -> dict[str, Any]:
    """Translate camelCase option aliases to the SDK's snake_case names."""
    if not options:
        return {}
    return {OPTION_ALIASES.get(key, key): value for key, value in options.items()}


def usage_extra(usage: Any, exclude: set[str]) -> dict[str, Any]:
    """Collect provider-specific usage fields for pass-through.

    Args:
        usage: SDK usage object (pydantic model or plain object)
        exclude: Field names already mapped to the normalized shape

    Returns:
        Dict of the remaining non-null fields
    """
    if usage is None:
        return {}
    if hasattr(usage, "model_dump"):
        data = usage.model_dump()
    elif isinstance(usage, dict):
        data = dict(usage)
    else:
        data = dict(vars(usage))
    return {k: v for k, v in data.items() if k not in exclude and v is not None}
