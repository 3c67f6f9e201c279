"""Operating-systems lab exercises: a virtual disk with a small file system, a monitor-guarded message buffer and a hole-list memory allocator."""

__version__ = "0.1.0"