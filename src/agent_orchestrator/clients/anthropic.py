"""Anthropic adapter implementation.

This adapter handles communication with the Anthropic messages API (Claude
models) and normalizes replies to the common format.

Anthropic has unique requirements:
- System prompt is passed as a top-level field, not in messages
- Reply content is a list of typed blocks rather than a single message
- Usage reports input_tokens/output_tokens instead of prompt/completion
"""

from contextlib import contextmanager
from typing import Any, Iterator

from anthropic import Anthropic, APIConnectionError, APIStatusError

from ..exceptions import InvalidResponseError, ProviderError, ProviderUnavailableError
from ..types import Message, MessageRole, NormalizedReply, Provider, UsageStats
from .base import BaseProviderAdapter, usage_extra

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"

SUPPORTED_OPTION_KEYS = {
    "temperature",
    "top_p",
    "top_k",
    "max_tokens",
    "stop_sequences",
    "metadata",
    "thinking",
}


class AnthropicAdapter(BaseProviderAdapter):
    """Anthropic messages adapter with normalized reply handling."""

    provider = Provider.ANTHROPIC

    def _create_client(self, api_key: str) -> Anthropic:
        """Create the Anthropic SDK client. Retries are left to callers."""
        return Anthropic(api_key=api_key, timeout=self.timeout, max_retries=0)

    def _get_supported_option_keys(self) -> set[str]:
        return SUPPORTED_OPTION_KEYS

    def _convert_messages(self, messages: list[Message]) -> dict[str, Any]:
        """Extract system messages into a single top-level system field.

        All system messages are joined with newlines regardless of position;
        the remaining messages keep their relative order.
        """
        system_parts = [msg.content for msg in messages if msg.role == MessageRole.SYSTEM]
        converted = [msg.to_dict() for msg in messages if msg.role != MessageRole.SYSTEM]

        fields: dict[str, Any] = {"messages": converted}
        if system_parts:
            fields["system"] = "\n".join(system_parts)
        return fields

    def _send(self, request: dict[str, Any]) -> Any:
        return self.client.messages.create(**request)

    @contextmanager
    def _handle_api_errors(self) -> Iterator[None]:
        """Handle Anthropic-specific errors."""
        try:
            yield
        except APIStatusError as e:
            raise ProviderError(
                self.provider.value,
                status_code=e.status_code,
                status_text=e.response.reason_phrase,
            ) from e
        except APIConnectionError as e:
            raise ProviderUnavailableError(self.provider.value, e) from e

    def _parse_response(self, response: Any) -> NormalizedReply:
        """Wrap Anthropic content blocks into the normalized shape."""
        try:
            text_content = "".join(
                block.text for block in response.content if block.type == "text"
            )

            usage = None
            if response.usage:
                prompt_tokens = response.usage.input_tokens
                completion_tokens = response.usage.output_tokens
                usage = UsageStats(
                    prompt_tokens=prompt_tokens,
                    completion_tokens=completion_tokens,
                    total_tokens=prompt_tokens + completion_tokens,
                    extra=usage_extra(response.usage, {"input_tokens", "output_tokens"}),
                )

            return NormalizedReply(content=text_content, usage=usage)
        except Exception as e:
            raise InvalidResponseError(self.provider.value, e) from e
