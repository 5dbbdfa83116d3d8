"""Session tracking for streaming connections."""

import threading
import time
import uuid
from dataclasses import dataclass, field

from ..logging import get_logger

logger = get_logger(__name__)


@dataclass
class Session:
    """One open streaming connection."""

    id: str
    client: str | None = None
    created_at: float = field(default_factory=time.time)


class SessionManager:
    """Tracks open streaming connections.

    Connections idle for longer than ``timeout`` seconds are closed by the
    websocket handler.
    """

    def __init__(self, session_timeout: int = 1800):
        """Initialize session manager.

        Args:
            session_timeout: Idle timeout in seconds
        """
        self._sessions: dict[str, Session] = {}
        self.timeout = session_timeout
        self._lock = threading.Lock()
        self.total_count = 0

    def open_session(self, client: str | None = None) -> Session:
        """Register a new connection.

        Args:
            client: Remote address, for logging

        Returns:
            New session
        """
        session = Session(id=str(uuid.uuid4()), client=client)
        with self._lock:
            self._sessions[session.id] = session
            self.total_count += 1
        logger.info(f"session connected: {session.id} from {client} ({self.active_count} active)")
        return session

    def close_session(self, session_id: str) -> bool:
        """Forget a session.

        Returns:
            True if session was removed, False if not found
        """
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"session disconnected: {session_id} ({self.active_count} active)")
        return removed

    @property
    def active_count(self) -> int:
        """Get number of active sessions."""
        return len(self._sessions)
