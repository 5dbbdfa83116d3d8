"""Bounded conversation memory for agents.

This module holds each agent's ordered context. Memory is capped: once the
cap is exceeded the oldest messages are evicted first, never the newest.
"""

from collections import deque
from typing import Iterator

from ..types import Message

DEFAULT_MEMORY_CAP = 20


def check_memory_cap(cap: int) -> int:
    """Validate a memory cap and return it.

    The cap must be even so eviction always drops whole user/assistant
    exchanges and retained history never starts with an assistant message.

    Raises:
        ValueError: If cap is not a positive even number.
    """
    if cap <= 0 or cap % 2:
        raise ValueError(f"memory cap must be a positive even number, got {cap}")
    return cap


class MemoryManager:
    """Manages an agent's bounded conversation history.

    Exchanges are recorded as a user/assistant pair in one step, so a failed
    call never leaves half an exchange behind.
    """

    def __init__(self, cap: int = DEFAULT_MEMORY_CAP):
        """Initialize with empty history.

        Args:
            cap: Maximum number of messages retained, a positive even number.
        """
        self.cap = check_memory_cap(cap)
        self._history: deque[Message] = deque(maxlen=cap)

    def record_exchange(self, user_message: Message, assistant_message: Message) -> None:
        """Append a completed exchange, evicting from the front past the cap.

        Args:
            user_message: The message that was sent.
            assistant_message: The reply that was received.
        """
        self._history.extend((user_message, assistant_message))

    def clear(self) -> None:
        """Drop all history."""
        self._history.clear()

    @property
    def messages(self) -> list[Message]:
        """Copy of the history, oldest first."""
        return list(self._history)

    def get_history(self) -> list[dict]:
        """Export history as list of dicts."""
        return [msg.to_dict() for msg in self._history]

    def __len__(self) -> int:
        return len(self._history)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._history))
