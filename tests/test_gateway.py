"""Tests for the API gateway."""

import pytest

from agent_orchestrator.core.gateway import APIGateway
from agent_orchestrator.core.rate_limiter import RateLimiter
from agent_orchestrator.exceptions import (
    ConfigurationError,
    ProviderError,
    RateLimitError,
    UnsupportedProviderError,
)
from agent_orchestrator.types import Provider


def failing(request):
    raise ProviderError("openai", status_code=500, status_text="Internal Server Error")


@pytest.fixture
def adapters(make_adapter):
    return {
        Provider.OPENAI: make_adapter(Provider.OPENAI),
        Provider.ANTHROPIC: make_adapter(Provider.ANTHROPIC),
    }


def make_gateway(adapters, openai_limit=10, anthropic_limit=10):
    limiter = RateLimiter({Provider.OPENAI: openai_limit, Provider.ANTHROPIC: anthropic_limit})
    return APIGateway(adapters, limiter)


def test_routes_to_requested_provider(adapters, sample_messages):
    gateway = make_gateway(adapters)

    reply = gateway.call("anthropic", sample_messages, "claude")

    assert reply.content == "reply 1"
    assert len(adapters[Provider.ANTHROPIC].requests) == 1
    assert adapters[Provider.OPENAI].requests == []


def test_unsupported_provider(adapters, sample_messages):
    gateway = make_gateway(adapters)

    with pytest.raises(UnsupportedProviderError):
        gateway.call("gemini", sample_messages, "gemini-pro")
    assert gateway.metrics.errors == 1


def test_missing_credential_never_touches_limiter(adapters, make_adapter, sample_messages):
    adapters[Provider.OPENAI] = make_adapter(Provider.OPENAI, api_key=None)
    gateway = make_gateway(adapters, openai_limit=1)

    for _ in range(3):
        with pytest.raises(ConfigurationError):
            gateway.call(Provider.OPENAI, sample_messages, "gpt-4")

    assert gateway.rate_limiter.snapshot()["openai"]["requests"] == 0
    # the other provider stays usable
    assert gateway.call(Provider.ANTHROPIC, sample_messages, "claude").content == "reply 1"


def test_rate_limited_call_makes_no_request(adapters, sample_messages):
    gateway = make_gateway(adapters, openai_limit=1)
    gateway.call(Provider.OPENAI, sample_messages, "gpt-4")

    with pytest.raises(RateLimitError) as exc_info:
        gateway.call(Provider.OPENAI, sample_messages, "gpt-4")

    assert exc_info.value.provider == "openai"
    assert exc_info.value.retry_after is not None
    assert len(adapters[Provider.OPENAI].requests) == 1


def test_provider_error_is_reraised_unchanged(adapters, sample_messages):
    adapters[Provider.OPENAI].script = failing
    gateway = make_gateway(adapters)

    with pytest.raises(ProviderError) as exc_info:
        gateway.call(Provider.OPENAI, sample_messages, "gpt-4")

    assert exc_info.value.status_code == 500
    assert gateway.metrics.errors == 1


def test_no_fallback_to_other_provider(adapters, sample_messages):
    adapters[Provider.OPENAI].script = failing
    gateway = make_gateway(adapters)

    with pytest.raises(ProviderError):
        gateway.call(Provider.OPENAI, sample_messages, "gpt-4")

    assert adapters[Provider.ANTHROPIC].requests == []


def test_metrics_count_completed_calls(adapters, sample_messages):
    gateway = make_gateway(adapters)
    gateway.call(Provider.OPENAI, sample_messages, "gpt-4")
    gateway.call(Provider.OPENAI, sample_messages, "gpt-4")
    gateway.call(Provider.ANTHROPIC, sample_messages, "claude")
    adapters[Provider.ANTHROPIC].script = failing
    with pytest.raises(ProviderError):
        gateway.call(Provider.ANTHROPIC, sample_messages, "claude")

    assert gateway.metrics.to_dict() == {
        "openaiRequests": 2,
        "anthropicRequests": 1,
        "errors": 1,
    }


def test_options_reach_adapter(adapters, sample_messages):
    gateway = make_gateway(adapters)

    gateway.call(Provider.OPENAI, sample_messages, "gpt-4", {"temperature": 0.2})

    assert adapters[Provider.OPENAI].requests[0]["temperature"] == 0.2


def test_providers_configured(adapters, make_adapter):
    adapters[Provider.ANTHROPIC] = make_adapter(Provider.ANTHROPIC, api_key=None)
    gateway = make_gateway(adapters)

    assert gateway.providers_configured() == {"openai": True, "anthropic": False}
