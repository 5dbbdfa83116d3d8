"""OpenAI adapter implementation.

This adapter handles communication with the OpenAI chat completions API and
normalizes replies to the common format. Messages pass through as-is,
including interleaved system messages.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from openai import APIConnectionError, APIStatusError, OpenAI

from ..exceptions import InvalidResponseError, ProviderError, ProviderUnavailableError
from ..types import Message, NormalizedReply, Provider, UsageStats
from .base import BaseProviderAdapter, usage_extra

DEFAULT_MODEL = "gpt-4"

SUPPORTED_OPTION_KEYS = {
    "temperature",
    "top_p",
    "max_tokens",
    "max_completion_tokens",
    "stop",
    "presence_penalty",
    "frequency_penalty",
    "seed",
    "n",
    "user",
    "logit_bias",
    "response_format",
    "reasoning_effort",
}


class OpenAIAdapter(BaseProviderAdapter):
    """OpenAI chat completions adapter with normalized reply handling."""

    provider = Provider.OPENAI

    def _create_client(self, api_key: str) -> OpenAI:
        """Create the OpenAI SDK client. Retries are left to callers."""
        return OpenAI(api_key=api_key, timeout=self.timeout, max_retries=0)

    def _get_supported_option_keys(self) -> set[str]:
        return SUPPORTED_OPTION_KEYS

    def _convert_messages(self, messages: list[Message]) -> dict[str, Any]:
        return {"messages": [msg.to_dict() for msg in messages]}

    def _send(self, request: dict[str, Any]) -> Any:
        return self.client.chat.completions.create(**request)

    @contextmanager
    def _handle_api_errors(self) -> Iterator[None]:
        """Handle OpenAI-specific errors."""
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
        """Parse an OpenAI chat completion into the normalized shape."""
        try:
            message = response.choices[0].message

            usage = None
            if response.usage:
                usage = UsageStats(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                    total_tokens=response.usage.total_tokens,
                    extra=usage_extra(
                        response.usage,
                        {"prompt_tokens", "completion_tokens", "total_tokens"},
                    ),
                )

            return NormalizedReply(content=message.content or "", usage=usage)
        except Exception as e:
            raise InvalidResponseError(self.provider.value, e) from e
