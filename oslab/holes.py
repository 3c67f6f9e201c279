"""Hole table of free physical memory with first-fit and worst-fit allocation."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable
from dataclasses import dataclass, replace

DEFAULT_CAPACITY = 64
_WORD_BYTES = 4
_MAP_WORDS = 1024


class OutOfMemoryError(Exception):
    """Raised when no hole is large enough for an allocation."""


class HoleTableFullError(Exception):
    """Raised when a freed block needs a table slot and none is left."""


@dataclass(frozen=True)
class Hole:
    """A contiguous run of free memory, measured in clicks."""

    base: int
    length: int

    @property
    def end(self) -> int:
        return self.base + self.length


class HoleTable:
    """Free memory kept as holes sorted by increasing address.

    Adjacent holes are merged when memory is freed. Allocation uses first fit
    by default and worst fit once it is switched on.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._holes: list[Hole] = []
        self.worst_fit = False
        self.swap_base: int | None = None

    def mem_init(self, chunks: Iterable[tuple[int, int]]) -> int:
        """Reset the table to the given (base, size) chunks; return the free total.

        A chunk of size zero ends the list, as it does when the kernel is asked
        for memory chunks. Memory above the highest chunk is set apart for swap.
        """
        self._holes = []
        free = 0
        top = 0
        for base, size in chunks:
            if size == 0:
                break
            self.free_mem(base, size)
            free += size
            top = max(top, base + size)
        self.swap_base = top + 1
        return free

    def set_worst_fit(self, option: int) -> None:
        """Use worst fit when option is non-zero, first fit otherwise."""
        self.worst_fit = bool(option)

    def alloc_mem(self, clicks: int) -> int:
        """Take ``clicks`` clicks from a hole and return the base of the block."""
        if clicks < 0:
            raise ValueError(f"cannot allocate {clicks} clicks")
        index = self._worst_hole(clicks) if self.worst_fit else self._first_hole(clicks)
        hole = self._holes[index]
        remaining = replace(hole, base=hole.base + clicks, length=hole.length - clicks)
        if remaining.length == 0:
            del self._holes[index]
        else:
            self._holes[index] = remaining
        return hole.base

    def _first_hole(self, clicks: int) -> int:
        for index, hole in enumerate(self._holes):
            if self.swap_base is not None and hole.base >= self.swap_base:
                break
            if hole.length >= clicks:
                return index
        raise OutOfMemoryError(f"no hole of {clicks} clicks")

    def _worst_hole(self, clicks: int) -> int:
        if not self._holes:
            raise OutOfMemoryError(f"no hole of {clicks} clicks")
        index = max(range(len(self._holes)), key=lambda i: (self._holes[i].length, -i))
        if self._holes[index].length < clicks:
            raise OutOfMemoryError(f"no hole of {clicks} clicks")
        return index

    def free_mem(self, base: int, clicks: int) -> None:
        """Return a block to the table, merging it with neighbouring holes."""
        if clicks == 0:
            return
        if clicks < 0:
            raise ValueError(f"cannot free {clicks} clicks")
        if len(self._holes) >= self.capacity:
            raise HoleTableFullError("Hole table full")
        index = bisect_left([hole.base for hole in self._holes], base)
        self._holes.insert(index, Hole(base, clicks))
        self._merge(index if index == 0 else index - 1)

    def _merge(self, index: int) -> None:
        """Merge the hole at ``index`` with up to two successors where they touch."""
        if index + 1 >= len(self._holes):
            return
        if not self._absorb_next(index):
            index += 1
        if index + 1 >= len(self._holes):
            return
        self._absorb_next(index)

    def _absorb_next(self, index: int) -> bool:
        hole, following = self._holes[index], self._holes[index + 1]
        if hole.end != following.base:
            return False
        self._holes[index] = replace(hole, length=hole.length + following.length)
        del self._holes[index + 1]
        return True

    def holes(self) -> tuple[Hole, ...]:
        """Return the holes in order of increasing address."""
        return tuple(self._holes)

    def hole_map(self, nbytes: int) -> tuple[int, list[int]]:
        """Describe the holes as a word buffer of ``nbytes`` bytes.

        Returns the number of holes described and the buffer words: a length
        and a base for each hole, followed by a terminating zero.
        """
        if nbytes < 2 * _WORD_BYTES:
            raise ValueError(f"buffer of {nbytes} bytes is too small")
        limit = min(nbytes // _WORD_BYTES, _MAP_WORDS) - 2
        words: list[int] = []
        for hole in self._holes:
            if len(words) >= limit:
                break
            words.extend((hole.length, hole.base))
        words.append(0)
        return len(words) // 2, words