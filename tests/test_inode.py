import io

import pytest

from oslab.bitmap import read_bitmap, set_block_taken
from oslab.inode import (
    ADDRESS_COUNT,
    INode,
    drop_inode,
    find_file,
    read_inodes,
    save_inode,
)
from oslab.superblock import (
    INODE_TABLE_OFFSET,
    MAX_FILE_NUM,
    SuperBlock,
    read_superblock,
    save_superblock,
)


def _disk(max_blocks=10):
    disk = io.BytesIO()
    save_superblock(disk, SuperBlock(max_block_num=max_blocks, free_blocks_num=max_blocks))
    disk.seek(INODE_TABLE_OFFSET)
    disk.write(INode.empty().pack() * MAX_FILE_NUM)
    return disk


def test_packed_inode_size():
    assert len(INode("a", 1, (0, -1, -1, -1, -1)).pack()) == 56


def test_empty_inode_is_all_minus_one():
    assert INode.empty().pack() == b"\xff" * INode.SIZE


def test_empty_round_trip():
    restored = INode.unpack(INode.empty().pack())
    assert restored.is_free
    assert restored == INode.empty()


def test_named_inode_round_trip():
    original = INode("a.txt", 5000, (3, 4, -1, -1, -1))
    assert INode.unpack(original.pack()) == original


def test_name_is_nul_terminated():
    assert INode("a.txt", 1, (0, -1, -1, -1, -1)).pack()[:6] == b"a.txt\0"


def test_name_too_long_raises():
    with pytest.raises(ValueError):
        INode("x" * 32, 1, (0, -1, -1, -1, -1)).pack()


def test_wrong_address_count_raises():
    with pytest.raises(ValueError):
        INode("a", 1, (0, 1))


def test_unpack_short_data_raises():
    with pytest.raises(ValueError):
        INode.unpack(b"\x00" * (INode.SIZE - 1))


def test_fresh_table_is_all_free():
    inodes = read_inodes(_disk())
    assert len(inodes) == MAX_FILE_NUM
    assert all(inode.is_free for inode in inodes)


def test_save_uses_first_free_slots():
    disk = _disk()
    first = save_inode(disk, INode("one", 10, (0, -1, -1, -1, -1)))
    second = save_inode(disk, INode("two", 20, (1, -1, -1, -1, -1)))
    assert (first, second) == (0, 1)
    inodes = read_inodes(disk)
    assert inodes[0].name == "one"
    assert inodes[1].size == 20


def test_find_file():
    disk = _disk()
    save_inode(disk, INode("one", 10, (0, -1, -1, -1, -1)))
    save_inode(disk, INode("two", 20, (1, -1, -1, -1, -1)))
    assert find_file(disk, "two") == 1
    assert find_file(disk, "three") is None


def test_full_table_raises():
    disk = _disk()
    for n in range(MAX_FILE_NUM):
        save_inode(disk, INode(f"f{n}", 1, (-1,) * ADDRESS_COUNT))
    with pytest.raises(ValueError):
        save_inode(disk, INode("extra", 1, (-1,) * ADDRESS_COUNT))


def test_drop_inode_frees_blocks_and_counters():
    disk = _disk(max_blocks=10)
    set_block_taken(disk, 2)
    set_block_taken(disk, 5)
    sb = read_superblock(disk)
    sb.free_blocks_num -= 2
    sb.free_inode_num -= 1
    save_superblock(disk, sb)
    slot = save_inode(disk, INode("file", 5000, (2, 5, -1, -1, -1)))

    drop_inode(disk, slot)

    after = read_superblock(disk)
    assert after.free_blocks_num == sb.free_blocks_num + 2
    assert after.free_inode_num == sb.free_inode_num + 1
    assert sum(read_bitmap(disk)) == 0
    assert read_inodes(disk)[slot].is_free
    assert find_file(disk, "file") is None


def test_dropped_slot_is_reused():
    disk = _disk()
    save_inode(disk, INode("a", 1, (-1,) * ADDRESS_COUNT))
    save_inode(disk, INode("b", 1, (-1,) * ADDRESS_COUNT))
    drop_inode(disk, 0)
    assert save_inode(disk, INode("c", 1, (-1,) * ADDRESS_COUNT)) == 0
    assert find_file(disk, "b") == 1


@pytest.mark.parametrize("index", [-1, MAX_FILE_NUM])
def test_drop_out_of_range_raises(index):
    with pytest.raises(IndexError):
        drop_inode(_disk(), index)