"""Multi-producer, multi-consumer FIFO queue that never blocks."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque


class LockfreeQueue:
    """FIFO queue whose operations are atomic and never wait.

    Built on deque, whose append and popleft are atomic, so no lock is held.
    """

    def __init__(self) -> None:
        self._entries: Deque[Any] = deque()

    def enqueue(self, value: Any) -> None:
        """Add a value at the back of the queue."""
        self._entries.append(value)

    def dequeue(self) -> Any:
        """Remove and return the oldest value; raise IndexError if empty."""
        try:
            return self._entries.popleft()
        except IndexError:
            raise IndexError("dequeue from an empty queue") from None

    def __len__(self) -> int:
        return len(self._entries)