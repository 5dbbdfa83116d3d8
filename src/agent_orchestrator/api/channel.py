"""Streaming channel dispatcher.

A SessionChannel turns inbound typed messages into engine operations and
returns one typed outbound event per message. It is independent of the
transport: the websocket handler feeds it raw frames and sends back what
it returns. Application errors become ``error`` events; nothing here ever
asks the transport to close.

Protocol:
- Client sends: {"type": "ping"}
- Client sends: {"type": "execute_agent", "agentId": "...", "message": "...", "context": {...}}
- Client sends: {"type": "start_collaboration", "agentIds": [...], "goal": "...", "iterations": 3}
- Server sends: {"type": "connected", "sessionId": "..."} once on open
- Server sends: {"type": "pong"}
- Server sends: {"type": "agent_response", "requestId": ..., "result": {...}}
- Server sends: {"type": "collaboration_result", "requestId": ..., "collaboration": {...}}
- Server sends: {"type": "error", "message": "..."} on any failure
Every server event carries a "timestamp".
"""

import json
import time
from typing import Any, Callable

from pydantic import ValidationError

from ..logging import get_logger
from ..orchestrator import Orchestrator
from .schemas import ExecuteAgentEvent, StartCollaborationEvent

logger = get_logger(__name__)


def make_event(event_type: str, **fields: Any) -> dict[str, Any]:
    """Build an outbound event stamped with its delivery time."""
    return {"type": event_type, **fields, "timestamp": time.time()}


class SessionChannel:
    """Dispatches inbound channel messages for one connection."""

    def __init__(self, orchestrator: Orchestrator, session_id: str):
        self.orchestrator = orchestrator
        self.session_id = session_id
        self._handlers: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
            "ping": self._handle_ping,
            "execute_agent": self._handle_execute_agent,
            "start_collaboration": self._handle_start_collaboration,
        }

    def welcome(self) -> dict[str, Any]:
        """Event sent once when the connection opens."""
        return make_event("connected", sessionId=self.session_id)

    def handle_message(self, raw: str | bytes) -> dict[str, Any]:
        """Handle one inbound frame and return the outbound event.

        Args:
            raw: The frame as received (JSON text)

        Returns:
            The outbound event; an ``error`` event for unparsable frames,
            unknown types, invalid payloads, and engine failures
        """
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return make_event("error", message=f"Invalid message: {e}")

        if not isinstance(data, dict):
            return make_event("error", message="Invalid message: expected a JSON object")

        msg_type = data.get("type")
        handler = self._handlers.get(msg_type) if isinstance(msg_type, str) else None
        if handler is None:
            return make_event("error", message="Unknown message type")

        try:
            return handler(data)
        except ValidationError as e:
            return make_event(
                "error",
                requestId=data.get("requestId"),
                message=f"Invalid {data['type']} payload: {e.error_count()} validation error(s)",
                details=e.errors(include_url=False, include_context=False),
            )
        except Exception as e:
            logger.warning(f"session {self.session_id}: {data['type']} failed: {e}")
            return make_event("error", requestId=data.get("requestId"), message=str(e))

    def _handle_ping(self, data: dict[str, Any]) -> dict[str, Any]:
        return make_event("pong")

    def _handle_execute_agent(self, data: dict[str, Any]) -> dict[str, Any]:
        event = ExecuteAgentEvent.model_validate(data)
        result = self.orchestrator.execute_agent(event.agent_id, event.message, event.options)
        return make_event(
            "agent_response",
            requestId=event.request_id,
            result=result.to_dict(),
        )

    def _handle_start_collaboration(self, data: dict[str, Any]) -> dict[str, Any]:
        event = StartCollaborationEvent.model_validate(data)
        run = self.orchestrator.collaborate(event.agent_ids, event.goal, event.iterations)
        return make_event(
            "collaboration_result",
            requestId=event.request_id,
            collaboration=run.to_dict(),
        )

