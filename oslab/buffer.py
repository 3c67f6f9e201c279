"""Bounded message buffer with a priority queue of special messages."""

from __future__ import annotations

from collections import deque
from typing import Any

from oslab.monitor import Condition, Monitor

DEFAULT_CAPACITY = 5


class Buffer:
    """Bounded FIFO of messages; special messages are read before normal ones.

    Special messages are unbounded and never make a writer wait.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._normal: deque[Any] = deque()
        self._special: deque[Any] = deque()
        self._monitor = Monitor()
        self._full = Condition()
        self._empty = Condition()

    def write(self, message: Any) -> None:
        """Append a normal message, waiting while the buffer is full."""
        with self._monitor:
            if len(self._normal) == self.capacity:
                self._monitor.wait(self._full)
            self._normal.append(message)
            if len(self._normal) == 1:
                self._monitor.signal(self._empty)

    def read(self) -> Any:
        """Take the oldest special message, or else the oldest normal one."""
        with self._monitor:
            if self._special:
                return self._special.popleft()
            if not self._normal:
                self._monitor.wait(self._empty)
            message = self._normal.popleft()
            if len(self._normal) == self.capacity - 1:
                self._monitor.signal(self._full)
            return message

    def special(self, message: Any) -> None:
        """Queue a special message."""
        with self._monitor:
            self._special.append(message)

    def snapshot(self) -> tuple[tuple[Any, ...], tuple[Any, ...]]:
        """Return the normal and the special messages currently queued."""
        with self._monitor:
            return tuple(self._normal), tuple(self._special)

    def display(self) -> None:
        """Print the normal messages on one line and the special ones on the next."""
        with self._monitor:
            for queue in (self._normal, self._special):
                print("".join(f"{message} " for message in queue), flush=True)