"""Memory manager call table with the hole-map and worst-fit calls and their commands."""

from __future__ import annotations

import errno
import re
import sys
from collections.abc import Callable, Sequence
from enum import IntEnum
from typing import Any

from oslab.holes import HoleTable

NCALLS = 80
HOLE_MAP_BUFFER_BYTES = 1024 * 4


class CallNumber(IntEnum):
    """System call numbers understood by the servers."""

    EXIT = 1
    FORK = 2
    READ = 3
    WRITE = 4
    OPEN = 5
    CLOSE = 6
    WAIT = 7
    CREAT = 8
    LINK = 9
    UNLINK = 10
    WAITPID = 11
    CHDIR = 12
    TIME = 13
    MKNOD = 14
    CHMOD = 15
    CHOWN = 16
    BRK = 17
    STAT = 18
    LSEEK = 19
    GETPID = 20
    MOUNT = 21
    UMOUNT = 22
    SETUID = 23
    GETUID = 24
    STIME = 25
    PTRACE = 26
    ALARM = 27
    FSTAT = 28
    PAUSE = 29
    UTIME = 30
    ACCESS = 33
    SYNC = 36
    KILL = 37
    RENAME = 38
    MKDIR = 39
    RMDIR = 40
    DUP = 41
    PIPE = 42
    TIMES = 43
    SETGID = 46
    GETGID = 47
    SIGNAL = 48
    IOCTL = 54
    FCNTL = 55
    EXEC = 59
    UMASK = 60
    CHROOT = 61
    SETSID = 62
    GETPGRP = 63
    KSIG = 64
    UNPAUSE = 65
    REVIVE = 67
    TASK_REPLY = 68
    SIGACTION = 71
    SIGSUSPEND = 72
    SIGPENDING = 73
    SIGPROCMASK = 74
    SIGRETURN = 75
    REBOOT = 76
    SVRCTL = 77
    HOLE_MAP = 78
    WORST_FIT = 79


class MemoryManager:
    """Memory manager that serves the calls concerning its hole table.

    Calls it does not handle are rejected with EINVAL.
    """

    def __init__(self, table: HoleTable | None = None) -> None:
        self.table = table if table is not None else HoleTable()
        self._handlers: dict[int, Callable[..., Any]] = {
            CallNumber.HOLE_MAP: self.do_hole_map,
            CallNumber.WORST_FIT: self.do_worst_fit,
        }

    def call(self, number: int, *args: Any) -> Any:
        """Dispatch a call by number and return the handler's result."""
        number = int(number)
        if not 0 <= number < NCALLS:
            raise OSError(errno.EINVAL, f"call number {number} out of range")
        handler = self._handlers.get(number)
        if handler is None:
            raise OSError(errno.EINVAL, f"call {number} not handled by the memory manager")
        return handler(*args)

    def do_hole_map(self, nbytes: int) -> tuple[int, list[int]]:
        """Return the hole count and a length/base word list ending with zero."""
        return self.table.hole_map(nbytes)

    def do_worst_fit(self, option: int) -> int:
        """Switch worst-fit allocation on (non-zero) or off (zero)."""
        self.table.set_worst_fit(option)
        return 0


SYSTEM = MemoryManager()


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def hole_map_main(argv: Sequence[str] | None = None) -> int:
    """Print the number of holes and the length of each one."""
    count, words = SYSTEM.call(CallNumber.HOLE_MAP, HOLE_MAP_BUFFER_BYTES)
    parts = [f"[{count}]\t"]
    pairs = iter(words)
    for length in pairs:
        if not length:
            break
        next(pairs, None)
        parts.append(f"{length}\t")
    print("".join(parts))
    return 0


def worst_fit_main(argv: Sequence[str] | None = None) -> int:
    """Turn worst fit on with ``1`` or off with ``0``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 1:
        return 1
    SYSTEM.call(CallNumber.WORST_FIT, _atoi(args[0]))
    return 0