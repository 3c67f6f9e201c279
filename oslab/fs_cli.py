"""Command that runs the virtual disk test scenarios."""

from __future__ import annotations

import os
import re
import subprocess
import sys
import time
from collections.abc import Callable, Sequence
from contextlib import suppress

from oslab.disk import (
    DEFAULT_DISK,
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

PLACEHOLDER_TEXT = "This is a placeholder text."
MANY_FILES = 65


def _copy_in(name: str, path: str) -> None:
    try:
        copy_to_disk(name, path)
    except DiskError as exc:
        print(exc)
    else:
        print(f"File {name} copied to virtual disk")


def _copy_out(name: str, path: str) -> None:
    try:
        copy_from_disk(name, path)
    except DiskError as exc:
        print(exc)
    else:
        print(f"File {name} copied to the system")


def _delete(name: str, path: str) -> None:
    try:
        delete_file(name, path)
    except DiskError as exc:
        print(exc)
    else:
        print(f"File {name} has been deleted")


def _report(formatter: Callable[[str], str], path: str) -> None:
    try:
        print(formatter(path), end="")
    except DiskError as exc:
        print(exc)


def _run(command: list[str]) -> None:
    sys.stdout.flush()
    try:
        subprocess.run(command, check=False)
    except OSError as exc:
        print(exc, file=sys.stderr)


def _data_validity(path: str) -> int:
    print("\n============================= TEST DATA VALIDITY =============================")
    _copy_in("test1.txt", path)
    _report(format_catalog, path)
    _report(format_disk_stats, path)
    with suppress(OSError):
        os.remove("test1.txt")
        print("test1.txt removed from the system")
    time.sleep(2)
    _run(["ls"])
    print()
    _copy_out("test1.txt", path)
    return 0


def _too_large_file(path: str) -> int:
    print("\n============================ TEST TOO LARGE FILE =============================")
    _report(format_disk_stats, path)
    print("\n")
    time.sleep(2)
    _run(["du", "test2.txt"])
    _copy_in("test2.txt", path)
    return 0


def _many_file_names() -> list[str]:
    return [f"test3_{i:03d}.txt" for i in range(1, MANY_FILES + 1)]


def _too_many_files(path: str) -> int:
    print("\n============================ TEST TOO MANY FILES =============================")
    names = _many_file_names()
    for name in names:
        try:
            with open(name, "w") as handle:
                handle.write(PLACEHOLDER_TEXT + "\n")
        except OSError as exc:
            print(f"Error opening file: {exc.strerror}", file=sys.stderr)
            return 1
        if name == names[-1]:
            _report(format_catalog, path)
            _report(format_disk_stats, path)
        _copy_in(name, path)
    return 0


def _delete_files(path: str) -> int:
    for name in _many_file_names():
        with suppress(OSError):
            os.remove(name)
    print("\n============================= TEST DELETE FILES ==============================")
    for i in range(1, 5):
        _copy_in(f"test4_{i}.txt", path)
    _report(format_catalog, path)
    _delete("test4_1.txt", path)
    _delete("test4_3.txt", path)
    _report(format_catalog, path)
    _copy_in("test4_5.txt", path)
    _copy_in("test4_5.txt", path)
    _report(format_catalog, path)
    _report(format_disk_stats, path)
    return 0


def _external_fragmentation(path: str) -> int:
    print("\n======================== TEST EXTERNAL FRAGMENTATION =========================")
    for i in range(1, 12):
        _copy_in(f"test5_{i}.txt", path)
    _report(format_catalog, path)
    removed = [f"test5_{i}.txt" for i in (3, 5, 7, 10)]
    for name in removed:
        _delete(name, path)
    _report(format_catalog, path)
    _report(format_disk_stats, path)
    for name in removed:
        _copy_in(name, path)
    _report(format_disk_stats, path)
    return 0


def _internal_fragmentation(path: str) -> int:
    print("\n======================== TEST INTERNAL FRAGMENTATION =========================")
    for i in range(1, 6):
        _copy_in(f"test6_{i}.txt", path)
    _report(format_disk_stats, path)
    _report(format_total_size, path)
    return 0


_SCENARIOS: dict[int, Callable[[str], int]] = {
    1: _data_validity,
    2: _too_large_file,
    3: _too_many_files,
    4: _delete_files,
    5: _external_fragmentation,
    6: _internal_fragmentation,
}


def run_scenario(option: int, size: int, path: str = DEFAULT_DISK) -> int:
    """Create a disk of ``size`` KiB, run one scenario on it, then delete the disk."""
    try:
        create_disk(size, path)
    except DiskError as exc:
        print(exc)
        return 1
    print(f"Created disk of size {size * 1024}B ")
    try:
        scenario = _SCENARIOS.get(option)
        return scenario(path) if scenario is not None else 0
    finally:
        with suppress(DiskError):
            delete_disk(path)


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``<size-in-KiB> <scenario>`` from the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        return 1
    return run_scenario(_atoi(args[1]), _atoi(args[0]))


if __name__ == "__main__":
    sys.exit(main())