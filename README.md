# oslab

This package holds three classic operating-systems exercises:

- **A virtual disk with a tiny file system.** The disk is an ordinary file
  made of 4096-byte blocks. It holds a superblock, an inode table for at most
  64 files, a block bitmap and then the data blocks. You can copy files of up
  to 20480 bytes (five blocks) in and out, list them and delete them.
- **A bounded message buffer guarded by a monitor.** Writers block while the
  buffer is full. Readers block while it is empty. Special messages go into a
  separate, unbounded queue and are always read first.
- **A hole-list memory allocator.** Free memory is kept as a list of holes
  sorted by address. Allocation is first fit by default, and you can switch it
  to worst fit. A freed block is merged with the holes next to it.

## Installation

```
pip install .
```

The package needs only the standard library. To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line programs

### `oslab-fs`: virtual disk scenarios

```
oslab-fs SIZE OPTION
```

`SIZE` is the disk size in KiB. The disk needs between 1 and 200 data blocks,
so `SIZE` must be from 16 to 815. `OPTION` chooses a scenario.

Each scenario does the following:

1. It creates a fresh disk file named `virtualDisk` in the current directory.
2. It runs its steps against that disk.
3. It removes the disk at the end.

The scenarios are:

| option | scenario                                                             |
|--------|----------------------------------------------------------------------|
| 1      | copy `test1.txt` in, remove it from the host, run `ls`, copy it back |
| 2      | run `du test2.txt`, then try to store it (meant to be too large)     |
| 3      | write `test3_001.txt` … `test3_065.txt` and store them all           |
| 4      | remove the `test3_*` files, then store, delete and reuse `test4_*.txt` |
| 5      | external fragmentation with `test5_1.txt` … `test5_11.txt`           |
| 6      | internal fragmentation with `test6_1.txt` … `test6_5.txt`            |

Scenario 3 writes its own input files. The other scenarios read theirs from
the current directory. An error from a disk operation is printed and the
scenario carries on.

An option outside 1–6 only creates the disk and removes it again. With the
wrong number of arguments the command exits with status 1.

### `oslab-buffers`: producer/consumer scenarios

```
oslab-buffers OPTION
```

This runs one of five threaded scenarios over three buffers, each with a
capacity of five. Messages are `Nr0`, `Nr1`, … and the special messages are
`spc0`, `spc1`, …. The scenarios are:

1. normal use
2. reading from an empty buffer (the writer arrives 5 s later)
3. writing to a full buffer
4. full buffers and a special message
5. several special messages

### `oslab-holes` and `oslab-worst-fit`

`oslab-holes` prints the number of holes in brackets, then the length of each
hole, separated by tabs.

`oslab-worst-fit N` switches worst-fit allocation on when `N` is non-zero and
off when `N` is 0. Without an argument it exits with status 1.

## Library use

### Virtual disk

```python
from oslab.disk import (
    DiskError, create_disk, copy_to_disk, copy_from_disk,
    delete_file, format_catalog, format_disk_stats, format_total_size,
    delete_disk,
)

create_disk(100, "disk.img")           # size in KiB; returns the SuperBlock
copy_to_disk("notes.txt", "disk.img")  # returns the file's INode
print(format_catalog("disk.img"), end="")
print(format_disk_stats("disk.img"), end="")
print(format_total_size("disk.img"), end="")
copy_from_disk("notes.txt", "disk.img")
delete_file("notes.txt", "disk.img")
delete_disk("disk.img")
```

If you leave out the disk path, these functions use `virtualDisk`. A file is
stored under the name it was given, which must be shorter than 32 bytes.
`copy_from_disk` writes the file back under that same name.

Failures raise `DiskError`. These include:

- a missing disk
- a disk size out of range
- a file that is too large, or no space left on the disk
- a full inode table
- a duplicate name
- a file that is not on the disk

The lower layers also work on their own with an open binary file:

| module            | contents                                                                       |
|-------------------|--------------------------------------------------------------------------------|
| `oslab.superblock` | `SuperBlock`, `read_superblock`, `save_superblock` and the layout constants   |
| `oslab.bitmap`    | `read_bitmap`, `find_free_block`, `set_block_taken`, `set_block_free`, `NoFreeBlockError` |
| `oslab.inode`     | `INode`, `read_inodes`, `save_inode`, `find_file`, `drop_inode`                |
| `oslab.data`      | `save_data`, `read_data`                                                       |

`oslab.fs_cli.run_scenario(option, size, path)` runs one of the numbered
scenarios from code.

### Monitor and buffer

```python
from oslab.buffer import Buffer

buf = Buffer()    # capacity 5
buf.write("Nr0")
buf.special("spc0")
buf.read()        # "spc0": special messages come first
buf.read()        # "Nr0"
buf.snapshot()    # ((), ()): the normal and the special queue
buf.display()     # prints both queues, one line each
```

`oslab.monitor` provides the primitives that the buffer is built on:

- `Semaphore`, with `p` and `v`
- `Condition`, with `wait` and `signal`
- `Monitor`, with `enter`, `leave`, `wait` and `signal`, also usable as a context manager

In a `Monitor`, `signal` hands the monitor to the woken thread. The signaller
then re-enters once that thread leaves.

`oslab.buffer_demo` provides `producer`, `consumer`, `broadcast_special` and
`run_scenario`. `run_scenario` returns the three buffers after the scenario
has run.

### Hole table

```python
from oslab.holes import HoleTable, OutOfMemoryError

table = HoleTable()                     # room for 64 holes
table.mem_init([(0, 100), (200, 50)])   # (base, length) chunks; returns 150
base = table.alloc_mem(30)              # first fit: 0
table.set_worst_fit(1)
base2 = table.alloc_mem(10)             # worst fit: 30, from the largest hole
table.free_mem(base, 30)
table.holes()                           # Hole(base, length) tuples by address
table.hole_map(4096)                    # (hole count, [length, base, ..., 0])
```

- `alloc_mem` raises `OutOfMemoryError` when no hole is large enough.
- `free_mem` raises `HoleTableFullError` when the table has no slot left.
- `mem_init` marks everything above the highest chunk as swap space. First fit
  does not take holes from there.

`oslab.mm_server.MemoryManager` dispatches numbered calls (`CallNumber`).
`call(CallNumber.HOLE_MAP, nbytes)` and `call(CallNumber.WORST_FIT, option)`
reach the two handlers. Any other call number raises `OSError` with `EINVAL`.

## What this package does not do

- The hole table is a model only. It does not manage real memory, and it does
  not swap processes in or out. It has no notion of processes at all.
- `oslab-holes` and `oslab-worst-fit` each talk to a memory manager that lives
  only for that one run. Its hole table starts empty, so `oslab-holes` reports
  no holes. A setting made by `oslab-worst-fit` does not carry over to later
  commands.
- The virtual disk has a single flat catalog with no directories. A file can
  use at most five blocks.