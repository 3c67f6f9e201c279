"""Map of taken and free data blocks, stored in the third block of the disk."""

from __future__ import annotations

import struct
from typing import BinaryIO

from oslab.superblock import BITMAP_OFFSET, read_superblock

BITMAP_SIZE = 200
FREE = 0
TAKEN = 1

_FORMAT = struct.Struct(f"<{BITMAP_SIZE}i")


class NoFreeBlockError(Exception):
    """Raised when every data block on the disk is taken."""


def read_bitmap(disk: BinaryIO) -> list[int]:
    """Return the block map: one entry per block, 0 when free and 1 when taken."""
    disk.seek(BITMAP_OFFSET)
    data = disk.read(_FORMAT.size).ljust(_FORMAT.size, b"\0")
    return list(_FORMAT.unpack(data))


def _write_bitmap(disk: BinaryIO, bitmap: list[int]) -> None:
    disk.seek(BITMAP_OFFSET)
    disk.write(_FORMAT.pack(*bitmap))


def _check_block(block_num: int) -> None:
    if not 0 <= block_num < BITMAP_SIZE:
        raise IndexError(f"block number {block_num} out of range")


def find_free_block(disk: BinaryIO) -> int:
    """Return the lowest-numbered free block on the disk."""
    limit = min(read_superblock(disk).max_block_num, BITMAP_SIZE)
    bitmap = read_bitmap(disk)
    for block_num, state in enumerate(bitmap[:limit]):
        if state == FREE:
            return block_num
    raise NoFreeBlockError("no free block on disk")


def _set_block(disk: BinaryIO, block_num: int, state: int) -> None:
    _check_block(block_num)
    bitmap = read_bitmap(disk)
    bitmap[block_num] = state
    _write_bitmap(disk, bitmap)


def set_block_taken(disk: BinaryIO, block_num: int) -> None:
    """Mark a block as taken."""
    _set_block(disk, block_num, TAKEN)


def set_block_free(disk: BinaryIO, block_num: int) -> None:
    """Mark a block as free."""
    _set_block(disk, block_num, FREE)