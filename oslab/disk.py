"""Operations on a whole virtual disk image: creation, file copies and reports."""

from __future__ import annotations

import math
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, Union

from oslab.bitmap import BITMAP_SIZE, TAKEN, NoFreeBlockError, find_free_block, read_bitmap, set_block_taken
from oslab.data import read_data, save_data
from oslab.inode import (
    ADDRESS_COUNT,
    NAME_LENGTH,
    UNUSED,
    INode,
    drop_inode,
    find_file,
    read_inodes,
    save_inode,
)
from oslab.superblock import (
    BLOCK_SIZE,
    MAX_FILE_NUM,
    MAX_FILE_SIZE,
    RESERVED_BLOCKS,
    SuperBlock,
    read_superblock,
    save_superblock,
)

DEFAULT_DISK = "virtualDisk"
CATALOG_WIDTH = 6
_ADDRESS_FIELD = 19

PathLike = Union[str, "os.PathLike[str]"]


class DiskError(Exception):
    """Raised when an operation on the virtual disk cannot be carried out."""


@contextmanager
def _open_disk(path: PathLike) -> Iterator[BinaryIO]:
    try:
        disk = open(path, "r+b")
    except OSError as exc:
        raise DiskError("Error opening virtual disk") from exc
    with disk:
        yield disk


def _pad_block(data: bytes) -> bytes:
    return data.ljust(BLOCK_SIZE, b"\0")


def create_disk(size: int, path: PathLike = DEFAULT_DISK) -> SuperBlock:
    """Create an empty disk of ``size`` KiB and return its superblock."""
    size_bytes = size * 1024
    block_count = size_bytes // BLOCK_SIZE
    max_block_num = block_count - RESERVED_BLOCKS
    if not 1 <= max_block_num <= BITMAP_SIZE:
        raise DiskError(f"Disk size of {size_bytes}B is out of range")
    superblock = SuperBlock(
        max_block_num=max_block_num,
        total_disk_size=block_count * BLOCK_SIZE,
        free_blocks_num=max_block_num,
        free_inode_num=MAX_FILE_NUM,
    )
    inode_table = b"".join(INode.empty().pack() for _ in range(MAX_FILE_NUM))
    bitmap = bytes(4 * BITMAP_SIZE)
    image = b"".join(
        (
            _pad_block(superblock.pack()),
            _pad_block(inode_table),
            _pad_block(bitmap),
            b"\xff" * (BLOCK_SIZE * max_block_num),
        )
    )
    try:
        with open(path, "wb") as disk:
            disk.write(image)
    except OSError as exc:
        raise DiskError("Error creating virtual disk") from exc
    return superblock


def delete_disk(path: PathLike = DEFAULT_DISK) -> None:
    """Remove the disk image."""
    try:
        os.remove(path)
    except OSError as exc:
        raise DiskError("Error deleting virtual disk") from exc


def delete_file(file_name: str, path: PathLike = DEFAULT_DISK) -> None:
    """Remove a file from the disk, releasing its inode and blocks."""
    with _open_disk(path) as disk:
        index = find_file(disk, os.fspath(file_name))
        if index is None:
            raise DiskError("File not on disk")
        drop_inode(disk, index)


def copy_to_disk(file_name: str, path: PathLike = DEFAULT_DISK) -> INode:
    """Copy a host file onto the disk under the same name; return its inode."""
    name = os.fspath(file_name)
    with _open_disk(path) as disk:
        try:
            source = open(name, "rb")
        except OSError as exc:
            raise DiskError("Error opening file to copy") from exc
        with source:
            superblock = read_superblock(disk)
            if superblock.free_inode_num - 1 < 0:
                raise DiskError("File limit reached")
            size = source.seek(0, os.SEEK_END)
            needed = -(-size // BLOCK_SIZE)
            if (
                size > MAX_FILE_SIZE
                or superblock.free_blocks_num <= 0
                or needed > superblock.free_blocks_num
            ):
                raise DiskError("Not enough space on virtual disk")
            if find_file(disk, name) is not None:
                raise DiskError(f"File named {name} already exists")
            if len(name.encode("utf-8")) >= NAME_LENGTH:
                raise DiskError(f"File name {name} is too long")

            addresses = []
            for _ in range(needed):
                try:
                    address = find_free_block(disk)
                except NoFreeBlockError as exc:
                    raise DiskError("Not enough space on virtual disk") from exc
                set_block_taken(disk, address)
                superblock.free_blocks_num -= 1
                addresses.append(address)

            inode = INode(name, size, tuple(addresses) + (UNUSED,) * (ADDRESS_COUNT - needed))
            save_data(disk, source, inode)
            save_inode(disk, inode)
            superblock.free_inode_num -= 1
            save_superblock(disk, superblock)
    return inode


def copy_from_disk(file_name: str, path: PathLike = DEFAULT_DISK) -> INode:
    """Copy a file from the disk to the host under the same name; return its inode."""
    name = os.fspath(file_name)
    with _open_disk(path) as disk:
        index = find_file(disk, name)
        if index is None:
            raise DiskError("File not on disk")
        inode = read_inodes(disk)[index]
        try:
            output = open(name, "w+b")
        except OSError as exc:
            raise DiskError("Error opening output file") from exc
        with output:
            read_data(disk, output, inode)
    return inode


def format_catalog(path: PathLike = DEFAULT_DISK) -> str:
    """Return the names of all files on the disk, six to a line."""
    with _open_disk(path) as disk:
        inodes = read_inodes(disk)
    parts = []
    on_line = 0
    for inode in inodes:
        if inode.is_free:
            continue
        parts.append(f"{inode.name}  ")
        on_line += 1
        if on_line == CATALOG_WIDTH:
            parts.append("\n")
            on_line = 0
    parts.append("\n")
    return "".join(parts)


def format_disk_stats(path: PathLike = DEFAULT_DISK) -> str:
    """Return a report of disk limits, block usage and stored files."""
    with _open_disk(path) as disk:
        superblock = read_superblock(disk)
        bitmap = read_bitmap(disk)[: superblock.max_block_num]
        inodes = read_inodes(disk)

    parts = [
        "\n------------------------------------ DISK ------------------------------------\n",
        " --total-dsize  --maxfsize  --maxfcount  --memblocks  --free-memblocks  -free-inodes\n",
        "%10dB %12dB %9d %11d %14d %16d\n"
        % (
            superblock.total_disk_size,
            superblock.max_file_size,
            superblock.max_inode_num,
            superblock.max_block_num,
            superblock.free_blocks_num,
            superblock.free_inode_num,
        ),
        "\n-------------------------------- MEMMORY USAGE -------------------------------\n",
        "%32s %32s" % ("--percent-used", "--bytes-free\n"),
    ]

    used = sum(1 for state in bitmap if state == TAKEN)
    if superblock.max_block_num > 0:
        percent = used / superblock.max_block_num * 100
    else:
        percent = math.nan
    parts.append("%26.2f%%  %32dB\n\n" % (percent, superblock.max_block_num * BLOCK_SIZE))

    for block_num, state in enumerate(bitmap):
        status = "in use " if state == TAKEN else "free   "
        parts.append("  Block %03d: %s" % (block_num, status))
        if (block_num + 1) % 4 == 0:
            parts.append("\n")

    parts.append("\n\n------------------------------------ FILES -----------------------------------\n")
    parts.append("%15s %12s %20s %20s\n" % ("--name", "--size", "--blocks-used", "--addresses"))
    for inode in inodes:
        if inode.is_free:
            continue
        used_addresses = [address for address in inode.addresses if address >= 0]
        addresses = "".join("%03d " % address for address in used_addresses)[:_ADDRESS_FIELD]
        parts.append(
            "%13s %13dB %13d              %s\n"
            % (inode.name, inode.size, len(used_addresses), addresses)
        )
    parts.append("\n")
    return "".join(parts)


def format_total_size(path: PathLike = DEFAULT_DISK) -> str:
    """Return the sum of file sizes next to the memory the disk actually uses."""
    with _open_disk(path) as disk:
        inodes = read_inodes(disk)
        superblock = read_superblock(disk)
    total = sum(inode.size for inode in inodes if inode.size > 0)
    used = (superblock.max_block_num - superblock.free_blocks_num) * BLOCK_SIZE
    return f"\nFile sizes sum: {total:12d}B\nTotal memmory used: {used:8d}B\n"