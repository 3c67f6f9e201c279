"""Copying file contents between host files and the disk's data blocks."""

from __future__ import annotations

from typing import BinaryIO

from oslab.inode import INode
from oslab.superblock import BLOCK_SIZE, DATA_OFFSET


def _block_offset(address: int) -> int:
    return DATA_OFFSET + address * BLOCK_SIZE


def _used_addresses(inode: INode) -> tuple[int, ...]:
    count = -(-max(inode.size, 0) // BLOCK_SIZE)
    if count > len(inode.addresses):
        raise ValueError(f"file of {inode.size} bytes does not fit in its addresses")
    used = inode.addresses[:count]
    if any(address < 0 for address in used):
        raise ValueError("inode lacks a block address for its data")
    return used


def save_data(disk: BinaryIO, source: BinaryIO, inode: INode) -> None:
    """Copy the inode's size worth of bytes from source into its data blocks."""
    remaining = inode.size
    for i, address in enumerate(_used_addresses(inode)):
        length = min(remaining, BLOCK_SIZE)
        source.seek(i * BLOCK_SIZE)
        chunk = source.read(length)
        disk.seek(_block_offset(address))
        disk.write(chunk.ljust(BLOCK_SIZE, b"\0"))
        remaining -= length


def read_data(disk: BinaryIO, output: BinaryIO, inode: INode) -> None:
    """Copy the inode's data blocks from the disk into output."""
    remaining = inode.size
    for i, address in enumerate(_used_addresses(inode)):
        length = min(remaining, BLOCK_SIZE)
        disk.seek(_block_offset(address))
        block = disk.read(BLOCK_SIZE).ljust(BLOCK_SIZE, b"\0")
        output.seek(i * BLOCK_SIZE)
        output.write(block[:length])
        remaining -= length