"""Kernel building blocks: bitmaps, lists, red-black trees, formatting, C strings, MMU, page-table and trap helpers."""

__version__ = "0.1.0"

__all__ = [
    "arith",
    "bitmap",
    "format",
    "cstring",
    "rc",
    "spinlock",
    "lists",
    "rbtree",
    "mmu",
    "trap",
    "kernel_pt",
]