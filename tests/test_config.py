"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from agent_orchestrator.config import Settings


def test_defaults(monkeypatch):
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "AGENT_MEMORY_CAP", "OPENAI_RATE_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.memory_cap == 20
    assert settings.get_rate_limit_for_provider("openai") == 60
    assert settings.get_api_key_for_provider("anthropic") is None


def test_memory_cap_from_env(monkeypatch):
    monkeypatch.setenv("AGENT_MEMORY_CAP", "8")

    assert Settings(_env_file=None).memory_cap == 8


@pytest.mark.parametrize("cap", ["3", "0", "-4"])
def test_memory_cap_must_be_positive_even(monkeypatch, cap):
    monkeypatch.setenv("AGENT_MEMORY_CAP", cap)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
