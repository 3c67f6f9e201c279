"""Table of file entries (inodes), stored in the second block of the disk."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, replace
from typing import BinaryIO, ClassVar

from oslab.bitmap import set_block_free
from oslab.superblock import (
    INODE_TABLE_OFFSET,
    MAX_FILE_NUM,
    read_superblock,
    save_superblock,
)

NAME_LENGTH = 32
ADDRESS_COUNT = 5
UNUSED = -1

_FORMAT = struct.Struct(f"<{NAME_LENGTH}si{ADDRESS_COUNT}i")


@dataclass
class INode:
    """One file entry: its name, its size in bytes and its data block numbers."""

    name: str = ""
    size: int = UNUSED
    addresses: tuple[int, ...] = field(default=(UNUSED,) * ADDRESS_COUNT)

    SIZE: ClassVar[int] = _FORMAT.size

    def __post_init__(self) -> None:
        self.addresses = tuple(self.addresses)
        if len(self.addresses) != ADDRESS_COUNT:
            raise ValueError(f"an inode holds exactly {ADDRESS_COUNT} addresses")

    @classmethod
    def empty(cls) -> INode:
        """Return an unused entry."""
        return cls()

    @property
    def is_free(self) -> bool:
        return self.size == UNUSED

    def pack(self) -> bytes:
        """Return the on-disk representation."""
        if self.is_free:
            raw_name = b"\xff" * NAME_LENGTH
        else:
            encoded = self.name.encode("utf-8")
            if len(encoded) >= NAME_LENGTH:
                raise ValueError(
                    f"file name longer than {NAME_LENGTH - 1} bytes: {self.name!r}"
                )
            raw_name = (encoded + b"\0").ljust(NAME_LENGTH, b"\xff")
        return _FORMAT.pack(raw_name, self.size, *self.addresses)

    @classmethod
    def _from_fields(cls, raw_name: bytes, size: int, *addresses: int) -> INode:
        if b"\0" in raw_name:
            name = raw_name.split(b"\0", 1)[0].decode("utf-8", "replace")
        else:
            name = ""
        return cls(name, size, addresses)

    @classmethod
    def unpack(cls, data: bytes) -> INode:
        """Build an inode from its on-disk representation."""
        if len(data) < cls.SIZE:
            raise ValueError(f"inode needs {cls.SIZE} bytes, got {len(data)}")
        return cls._from_fields(*_FORMAT.unpack(data[: cls.SIZE]))


_TABLE_BYTES = INode.SIZE * MAX_FILE_NUM


def read_inodes(disk: BinaryIO) -> list[INode]:
    """Return every entry of the inode table, used or not."""
    disk.seek(INODE_TABLE_OFFSET)
    data = disk.read(_TABLE_BYTES)
    if len(data) < _TABLE_BYTES:
        raise ValueError("inode table is truncated")
    return [INode._from_fields(*fields) for fields in _FORMAT.iter_unpack(data)]


def _write_inodes(disk: BinaryIO, inodes: list[INode]) -> None:
    disk.seek(INODE_TABLE_OFFSET)
    disk.write(b"".join(inode.pack() for inode in inodes))


def save_inode(disk: BinaryIO, inode: INode) -> int:
    """Store the inode in the first unused slot and return that slot's index."""
    inodes = read_inodes(disk)
    slot = next((i for i, entry in enumerate(inodes) if entry.is_free), None)
    if slot is None:
        raise ValueError("inode table is full")
    inodes[slot] = replace(inode)
    _write_inodes(disk, inodes)
    return slot


def find_file(disk: BinaryIO, file_name: str) -> int | None:
    """Return the slot index of the file with this name, or None if absent."""
    return next(
        (
            i
            for i, entry in enumerate(read_inodes(disk))
            if not entry.is_free and entry.name == file_name
        ),
        None,
    )


def drop_inode(disk: BinaryIO, index: int) -> None:
    """Clear the slot, free its data blocks and update the superblock counters."""
    if not 0 <= index < MAX_FILE_NUM:
        raise IndexError(f"inode index {index} out of range")
    superblock = read_superblock(disk)
    inodes = read_inodes(disk)
    for address in inodes[index].addresses:
        if address != UNUSED:
            set_block_free(disk, address)
            superblock.free_blocks_num += 1
    inodes[index] = INode.empty()
    _write_inodes(disk, inodes)
    superblock.free_inode_num += 1
    save_superblock(disk, superblock)