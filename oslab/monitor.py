"""Semaphores, condition variables and a signal-and-wait monitor built on them."""

from __future__ import annotations

import threading


class Semaphore:
    """Counting semaphore with the classic P (wait) and V (signal) operations."""

    def __init__(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"semaphore value must be non-negative, got {value}")
        self._sem = threading.Semaphore(value)

    def p(self) -> None:
        """Decrement the counter, blocking while it is zero."""
        self._sem.acquire()

    def v(self) -> None:
        """Increment the counter, waking one blocked thread if there is one."""
        self._sem.release()


class Condition:
    """Condition on which threads inside a monitor wait to be signalled."""

    def __init__(self) -> None:
        self._sem = Semaphore(0)
        self._waiting = 0

    @property
    def waiting_count(self) -> int:
        """Number of threads waiting on this condition."""
        return self._waiting

    def wait(self) -> None:
        """Block until signalled."""
        self._sem.p()

    def signal(self) -> bool:
        """Wake one waiting thread; return False when nobody was waiting."""
        if self._waiting:
            self._waiting -= 1
            self._sem.v()
            return True
        return False


class Monitor:
    """Monitor whose signal hands the monitor to the woken thread and waits for it."""

    def __init__(self) -> None:
        self._sem = Semaphore(1)

    def enter(self) -> None:
        """Enter the monitor, blocking while another thread is inside."""
        self._sem.p()

    def leave(self) -> None:
        """Leave the monitor."""
        self._sem.v()

    def wait(self, condition: Condition) -> None:
        """Leave the monitor and wait on the condition; return owning the monitor."""
        condition._waiting += 1
        self.leave()
        condition.wait()

    def signal(self, condition: Condition) -> None:
        """Wake a waiter, if any, and re-enter once it has left the monitor."""
        if condition.signal():
            self.enter()

    def __enter__(self) -> Monitor:
        self.enter()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.leave()