import re

import pytest

from oslab.disk import (
    DiskError,
    copy_from_disk,
    copy_to_disk,
    create_disk,
    delete_disk,
    delete_file,
    format_catalog,
    format_disk_stats,
    format_total_size,
)
from oslab.inode import UNUSED
from oslab.superblock import BLOCK_SIZE, MAX_FILE_NUM, MAX_FILE_SIZE, RESERVED_BLOCKS, read_superblock


def _superblock(path):
    with open(path, "rb") as disk:
        return read_superblock(disk)


@pytest.fixture
def disk(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "virtualDisk"
    create_disk(100, path)
    return path


def _host_file(name, size, fill=b"x"):
    data = (fill * size)[:size]
    with open(name, "wb") as handle:
        handle.write(data)
    return data


def test_create_disk_layout(tmp_path):
    path = tmp_path / "virtualDisk"
    superblock = create_disk(100, path)
    assert superblock.total_disk_size == (superblock.max_block_num + RESERVED_BLOCKS) * BLOCK_SIZE
    assert path.stat().st_size == superblock.total_disk_size
    assert superblock.free_blocks_num == superblock.max_block_num
    assert superblock.free_inode_num == MAX_FILE_NUM
    assert superblock.max_file_size == MAX_FILE_SIZE
    assert _superblock(path) == superblock


@pytest.mark.parametrize("size", [0, 12, 1000])
def test_create_disk_rejects_bad_size(tmp_path, size):
    with pytest.raises(DiskError):
        create_disk(size, tmp_path / "virtualDisk")


def test_round_trip(disk, tmp_path):
    data = bytes(range(256)) * 40
    (tmp_path / "payload.bin").write_bytes(data)
    inode = copy_to_disk("payload.bin", disk)
    (tmp_path / "payload.bin").unlink()
    restored = copy_from_disk("payload.bin", disk)
    assert (tmp_path / "payload.bin").read_bytes() == data
    assert restored == inode
    used = [a for a in inode.addresses if a != UNUSED]
    assert len(used) * BLOCK_SIZE >= len(data) > (len(used) - 1) * BLOCK_SIZE


def test_copy_updates_counters(disk):
    before = _superblock(disk)
    _host_file("a.txt", BLOCK_SIZE + 1)
    inode = copy_to_disk("a.txt", disk)
    after = _superblock(disk)
    used = [a for a in inode.addresses if a != UNUSED]
    assert after.free_blocks_num == before.free_blocks_num - len(used)
    assert after.free_inode_num == before.free_inode_num - 1


def test_delete_restores_counters(disk):
    before = _superblock(disk)
    _host_file("a.txt", 3 * BLOCK_SIZE)
    copy_to_disk("a.txt", disk)
    delete_file("a.txt", disk)
    assert _superblock(disk) == before
    assert "a.txt" not in format_catalog(disk)


def test_freed_block_is_reused(disk):
    inodes = {}
    for name in ("a.txt", "b.txt", "c.txt"):
        _host_file(name, 10)
        inodes[name] = copy_to_disk(name, disk)
    delete_file("b.txt", disk)
    _host_file("d.txt", 10)
    assert copy_to_disk("d.txt", disk).addresses == inodes["b.txt"].addresses


def test_too_large_file(disk):
    _host_file("big.txt", MAX_FILE_SIZE + 1)
    with pytest.raises(DiskError, match="Not enough space"):
        copy_to_disk("big.txt", disk)


def test_duplicate_name(disk):
    _host_file("a.txt", 10)
    copy_to_disk("a.txt", disk)
    with pytest.raises(DiskError, match="already exists"):
        copy_to_disk("a.txt", disk)


def test_missing_source(disk):
    with pytest.raises(DiskError, match="Error opening file to copy"):
        copy_to_disk("absent.txt", disk)


def test_missing_disk(tmp_path):
    with pytest.raises(DiskError, match="Error opening virtual disk"):
        format_catalog(tmp_path / "nothing")


def test_delete_missing_file(disk):
    with pytest.raises(DiskError, match="File not on disk"):
        delete_file("absent.txt", disk)


def test_copy_from_missing_file(disk):
    with pytest.raises(DiskError, match="File not on disk"):
        copy_from_disk("absent.txt", disk)


def test_file_limit(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "virtualDisk"
    create_disk(800, path)
    for i in range(MAX_FILE_NUM):
        _host_file(f"f{i}.txt", 5)
        copy_to_disk(f"f{i}.txt", path)
    _host_file("extra.txt", 5)
    with pytest.raises(DiskError, match="File limit reached"):
        copy_to_disk("extra.txt", path)
    assert _superblock(path).free_inode_num == 0


def test_empty_catalog(disk):
    assert format_catalog(disk) == "\n"


def test_catalog_wraps_after_six(disk):
    names = [f"n{i}.txt" for i in range(7)]
    for name in names:
        _host_file(name, 1)
        copy_to_disk(name, disk)
    lines = format_catalog(disk).split("\n")
    assert lines[0].split() == names[:6]
    assert lines[1].split() == names[6:]


def test_stats_empty_disk(disk):
    stats = format_disk_stats(disk)
    assert "0.00%" in stats
    assert "in use" not in stats
    assert stats.count("free   ") == _superblock(disk).max_block_num


def test_stats_lists_files(disk):
    _host_file("a.txt", MAX_FILE_SIZE)
    copy_to_disk("a.txt", disk)
    stats = format_disk_stats(disk)
    assert stats.count("in use") == MAX_FILE_SIZE // BLOCK_SIZE
    file_line = next(line for line in stats.splitlines() if "a.txt" in line)
    assert file_line.endswith("000 001 002 003 004")
    assert f"{MAX_FILE_SIZE}B" in file_line


def test_total_size(disk):
    sizes = {"a.txt": 100, "b.txt": BLOCK_SIZE + 7}
    for name, size in sizes.items():
        _host_file(name, size)
        copy_to_disk(name, disk)
    report = format_total_size(disk)
    total = int(re.search(r"File sizes sum:\s+(\d+)B", report).group(1))
    used = int(re.search(r"Total memmory used:\s+(\d+)B", report).group(1))
    superblock = _superblock(disk)
    assert total == sum(sizes.values())
    assert used == (superblock.max_block_num - superblock.free_blocks_num) * BLOCK_SIZE
    assert used >= total


def test_delete_disk(disk):
    delete_disk(disk)
    assert not disk.exists()
    with pytest.raises(DiskError):
        delete_disk(disk)