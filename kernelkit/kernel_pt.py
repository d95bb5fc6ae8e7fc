"""Static kernel page tables for the virt machine and a walker over them.

The tables map the first 2 GB of physical memory with 2 MB blocks:

* 0..128 MB is flash for boot ROM code and is left unmapped.
* 128 MB..176 MB covers the GIC, UART0 and virtio devices and is mapped as
  device memory.
* 1 GB..2 GB is RAM and is mapped as normal kernel data.
"""

import operator
from dataclasses import dataclass, field
from typing import Dict, Tuple

from kernelkit.mmu import (
    N_PTE_PER_TABLE,
    PAGE_SIZE,
    PTE_KERNEL_DATA,
    PTE_KERNEL_DEVICE,
    PTE_TABLE,
    PTE_VALID,
    U64_MASK,
    pte_address,
    va_parts,
)

BLOCK_SIZE = 0x200000  # Each level 2 entry covers 2 MB.

_ROM_END = 0x8000000
_DEVICE_END = 0xB000000
_RAM_START = 0x40000000

_DESCRIPTOR_TYPE_MASK = 0x3
_LEVEL_SHIFTS = (39, 30, 21, 12)

Table = Tuple[int, ...]


class PageFault(Exception):
    """Raised when a virtual address has no valid translation."""

    def __init__(self, va: int, level: int, reason: str = "invalid entry"):
        super().__init__(f"page fault at {va:#x} on level {level}: {reason}")
        self.va = va
        self.level = level
        self.reason = reason


def _pad(entries: list) -> Table:
    return tuple(entries + [0] * (N_PTE_PER_TABLE - len(entries)))


def lv2_device_table() -> Table:
    """Level 2 table spanning 0..1 GB: boot ROM unmapped, devices mapped."""
    rom = [addr & ~PTE_VALID for addr in range(0, _ROM_END, BLOCK_SIZE)]
    devices = [addr | PTE_KERNEL_DEVICE for addr in range(_ROM_END, _DEVICE_END, BLOCK_SIZE)]
    return _pad(rom + devices)


def lv2_ram_table() -> Table:
    """Level 2 table spanning 1..2 GB, all mapped as kernel data."""
    return tuple(
        (_RAM_START + i * BLOCK_SIZE) | PTE_KERNEL_DATA for i in range(N_PTE_PER_TABLE)
    )


@dataclass(frozen=True)
class KernelPageTables:
    """A set of page tables keyed by the physical address each is placed at."""

    root: int
    tables: Dict[int, Table] = field(default_factory=dict)
    invalid: int = 0

    @property
    def level0(self) -> Table:
        """The root table."""
        return self.tables[self.root]

    def translate(self, va: int) -> int:
        """Walk the tables and return the physical address ``va`` maps to.

        Only the index and offset bits of ``va`` take part in the walk.
        Raises PageFault where no valid mapping exists.
        """
        va = operator.index(va)
        indices = va_parts(va)
        table_addr = self.root
        for level, index in enumerate(indices):
            table = self.tables.get(table_addr)
            if table is None:
                raise PageFault(va, level, f"no table at {table_addr:#x}")
            entry = table[index]
            if not entry & PTE_VALID:
                raise PageFault(va, level)
            is_table = (entry & _DESCRIPTOR_TYPE_MASK) == PTE_TABLE
            if level == len(indices) - 1:
                if not is_table:
                    raise PageFault(va, level, "reserved descriptor")
                return pte_address(entry) | (va & (PAGE_SIZE - 1))
            if not is_table:
                if level == 0:
                    raise PageFault(va, level, "block descriptor at level 0")
                span = 1 << _LEVEL_SHIFTS[level]
                return (pte_address(entry) & ~(span - 1) & U64_MASK) | (va & (span - 1))
            table_addr = pte_address(entry)
        raise PageFault(va, len(indices) - 1)


def build_kernel_page_tables(table_base: int) -> KernelPageTables:
    """Lay the kernel tables out in consecutive pages from physical ``table_base``.

    The order is level 0, level 1, the device level 2 table, the RAM level 2
    table and finally an all-invalid table.
    """
    table_base = operator.index(table_base)
    if table_base < 0 or table_base % PAGE_SIZE:
        raise ValueError(f"table base {table_base:#x} is not page aligned")
    if table_base + 5 * PAGE_SIZE > U64_MASK + 1:
        raise ValueError(f"table base {table_base:#x} leaves no room for the tables")
    level0_addr, level1_addr, dev_addr, ram_addr, invalid_addr = (
        table_base + i * PAGE_SIZE for i in range(5)
    )
    tables = {
        level0_addr: _pad([level1_addr + PTE_TABLE]),
        level1_addr: _pad([dev_addr + PTE_TABLE, ram_addr + PTE_TABLE]),
        dev_addr: lv2_device_table(),
        ram_addr: lv2_ram_table(),
        invalid_addr: _pad([]),
    }
    return KernelPageTables(root=level0_addr, tables=tables, invalid=invalid_addr)