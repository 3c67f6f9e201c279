"""Superblock of the virtual disk, plus the constants that fix the disk layout."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

BLOCK_SIZE = 4096
MAX_FILE_SIZE = 20480
MAX_FILE_NUM = 64

RESERVED_BLOCKS = 3
SUPERBLOCK_OFFSET = 0
INODE_TABLE_OFFSET = BLOCK_SIZE
BITMAP_OFFSET = 2 * BLOCK_SIZE
DATA_OFFSET = 3 * BLOCK_SIZE

_FORMAT = struct.Struct("<6i")


@dataclass
class SuperBlock:
    """Disk-wide limits and counters kept in the first block of the disk."""

    max_file_size: int = MAX_FILE_SIZE
    max_inode_num: int = MAX_FILE_NUM
    max_block_num: int = 0
    total_disk_size: int = 0
    free_blocks_num: int = 0
    free_inode_num: int = MAX_FILE_NUM

    SIZE: ClassVar[int] = _FORMAT.size

    def pack(self) -> bytes:
        """Return the on-disk representation."""
        return _FORMAT.pack(
            self.max_file_size,
            self.max_inode_num,
            self.max_block_num,
            self.total_disk_size,
            self.free_blocks_num,
            self.free_inode_num,
        )

    @classmethod
    def unpack(cls, data: bytes) -> SuperBlock:
        """Build a superblock from its on-disk representation."""
        if len(data) < cls.SIZE:
            raise ValueError(
                f"superblock needs {cls.SIZE} bytes, got {len(data)}"
            )
        return cls(*_FORMAT.unpack(data[: cls.SIZE]))


def read_superblock(disk: BinaryIO) -> SuperBlock:
    """Read the superblock from the start of the disk."""
    disk.seek(SUPERBLOCK_OFFSET)
    return SuperBlock.unpack(disk.read(SuperBlock.SIZE))


def save_superblock(disk: BinaryIO, superblock: SuperBlock) -> None:
    """Write the superblock to the start of the disk."""
    disk.seek(SUPERBLOCK_OFFSET)
    disk.write(superblock.pack())