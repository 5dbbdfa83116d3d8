"""centralized configuration management using pydantic settings.

configuration is loaded from environment variables and optional .env files.
the engine never reads settings on its own; the surrounding process builds
an Orchestrator from them.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """main settings class for the orchestrator.

    attributes:
        openai_api_key: api key for openai
        anthropic_api_key: api key for anthropic (claude)
        openai_rate_limit: openai requests allowed per minute
        anthropic_rate_limit: anthropic requests allowed per minute
        memory_cap: maximum number of messages kept in an agent's memory (even)
        request_timeout: timeout in seconds for a single provider call
        log_level: logging level (DEBUG, INFO, WARNING, ERROR)
        session_timeout: idle timeout in seconds for streaming sessions
        cors_origin: allowed origin for the api server
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # api keys for llm providers
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None

    # per-minute request quotas
    openai_rate_limit: int = Field(default=60, gt=0)
    anthropic_rate_limit: int = Field(default=60, gt=0)

    # engine configuration
    memory_cap: int = Field(default=20, gt=0, multiple_of=2, alias="AGENT_MEMORY_CAP")
    request_timeout: float = Field(default=60.0, gt=0)

    # server configuration
    log_level: str = Field(default="WARNING", alias="AGENT_ORCHESTRATOR_LOG_LEVEL")
    session_timeout: int = Field(default=1800, ge=60)
    cors_origin: str = "http://localhost:3001"

    def get_api_key_for_provider(self, provider: str) -> str | None:
        """get the api key for a specific provider.

        args:
            provider: provider name (openai, anthropic)

        returns:
            api key or None if not set
        """
        key_map = {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }
        return key_map.get(provider)

    def get_rate_limit_for_provider(self, provider: str) -> int:
        """get the per-minute request quota for a provider."""
        limit_map = {
            "openai": self.openai_rate_limit,
            "anthropic": self.anthropic_rate_limit,
        }
        return limit_map[provider]


@lru_cache
def get_settings() -> Settings:
    """get the singleton settings instance.

    call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
