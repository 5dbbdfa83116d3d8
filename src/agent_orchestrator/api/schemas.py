"""Pydantic models for API requests and streaming events."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ==================== http requests ====================


class CreateAgentRequest(BaseModel):
    """Request to create an agent. Every field is optional."""

    name: str | None = None
    role: str | None = None
    provider: str | None = None
    model: str | None = None
    instructions: str | None = None


class ExecuteRequest(BaseModel):
    """Request to run one exchange with an agent."""

    message: str
    options: dict[str, Any] | None = None


class CollaborateRequest(BaseModel):
    """Request to run a collaboration."""

    model_config = ConfigDict(populate_by_name=True)

    agent_ids: list[str] = Field(alias="agentIds", min_length=1)
    goal: str
    iterations: int = Field(default=3, gt=0)


# ==================== inbound channel events ====================


class ChannelEvent(BaseModel):
    """Fields shared by every inbound channel event."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str
    request_id: Any = Field(default=None, alias="requestId")


class ExecuteContext(BaseModel):
    """Caller context attached to an ``execute_agent`` event."""

    model_config = ConfigDict(extra="allow")

    options: dict[str, Any] | None = None


class ExecuteAgentEvent(ChannelEvent):
    """``execute_agent``: run one exchange with an agent."""

    agent_id: str = Field(alias="agentId")
    message: str
    context: ExecuteContext | None = None

    @property
    def options(self) -> dict[str, Any] | None:
        return self.context.options if self.context else None


class StartCollaborationEvent(ChannelEvent):
    """``start_collaboration``: run a collaboration to completion."""

    agent_ids: list[str] = Field(alias="agentIds", min_length=1)
    goal: str
    iterations: int = Field(default=3, gt=0)
