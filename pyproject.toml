[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "oslab"
version = "0.1.0"
description = "Operating-systems lab exercises: a block-based virtual disk, a monitor-guarded message buffer and a hole-list memory allocator"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "file system",
    "virtual disk",
    "inode",
    "monitor",
    "semaphore",
    "producer consumer",
    "memory allocation",
    "worst fit",
    "first fit",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oslab-fs = "oslab.fs_cli:main"
oslab-buffers = "oslab.buffer_demo:main"
oslab-holes = "oslab.mm_server:hole_map_main"
oslab-worst-fit = "oslab.mm_server:worst_fit_main"

[tool.setuptools.packages.find]
include = ["oslab*"]

[tool.pytest.ini_options]
addopts = "-ra"
