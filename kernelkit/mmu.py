"""AArch64 page-table entry layout and kernel/physical address conversion."""

import operator

U64_MASK = (1 << 64) - 1

PAGE_SIZE = 4096
N_PTE_PER_TABLE = 512

# Memory region attribute indices and their MAIR encodings.
MT_DEVICE_nGnRnE = 0x0
MT_NORMAL = 0x1
MT_NORMAL_NC = 0x2
MT_DEVICE_nGnRnE_FLAGS = 0x00
MT_NORMAL_FLAGS = 0xFF  # Inner/Outer Write-Back Non-Transient RW-Allocate
MT_NORMAL_NC_FLAGS = 0x44  # Inner/Outer Non-Cacheable

SH_OUTER = 2 << 8
SH_INNER = 3 << 8

AF_USED = 1 << 10

PTE_NORMAL_NC = (MT_NORMAL_NC << 2) | AF_USED | SH_OUTER
PTE_NORMAL = (MT_NORMAL << 2) | AF_USED | SH_OUTER
PTE_DEVICE = (MT_DEVICE_nGnRnE << 2) | AF_USED

PTE_VALID = 0x1

PTE_TABLE = 0x3
PTE_BLOCK = 0x1
PTE_PAGE = 0x3

PTE_KERNEL = 0 << 6
PTE_USER = 1 << 6
PTE_RO = 1 << 7
PTE_RW = 0 << 7

PTE_KERNEL_DATA = PTE_KERNEL | PTE_NORMAL | PTE_BLOCK
PTE_KERNEL_DEVICE = PTE_KERNEL | PTE_DEVICE | PTE_BLOCK
PTE_USER_DATA = PTE_USER | PTE_NORMAL | PTE_PAGE

PTE_HIGH_NX = 1 << 54

KSPACE_MASK = 0xFFFF000000000000
_PTE_FLAG_MASK = 0xFFFF000000000FFF

# Physical memory layout of the virt machine.
EXTMEM = 0x40000000
PHYSTOP = 0x80000000
KERNLINK = KSPACE_MASK + EXTMEM

KERNEL_BASE = 0xFFFF000000000000
MMIO_BASE = KERNEL_BASE + 0xA000000
LOCAL_BASE = KERNEL_BASE + 0x40000000

PUARTBASE = 0x9000000
UARTBASE = KERNEL_BASE + PUARTBASE
PGICBASE = 0x08000000
GICBASE = KERNEL_BASE + PGICBASE
PVIRTIO0 = 0x0A000000
VIRTIO0 = KERNEL_BASE + PVIRTIO0


def _u64(value: int) -> int:
    value = operator.index(value)
    if not 0 <= value <= U64_MASK:
        raise ValueError(f"{value:#x} is not a 64-bit unsigned value")
    return value


def k2p(addr: int) -> int:
    """Convert a kernel virtual address into a physical address."""
    return (_u64(addr) - KSPACE_MASK) & U64_MASK


def p2k(addr: int) -> int:
    """Convert a physical address into a kernel virtual address."""
    return (_u64(addr) + KSPACE_MASK) & U64_MASK


def kspace(addr: int) -> int:
    """Force any address into the kernel address space."""
    return _u64(addr) | KSPACE_MASK


def pspace(addr: int) -> int:
    """Force any address into the physical address space."""
    return _u64(addr) & ~KSPACE_MASK & U64_MASK


def pte_address(pte: int) -> int:
    """Return the output address held in a page-table entry."""
    return _u64(pte) & ~_PTE_FLAG_MASK & U64_MASK


def pte_flags(pte: int) -> int:
    """Return the attribute bits of a page-table entry."""
    return _u64(pte) & _PTE_FLAG_MASK


def va_offset(va: int) -> int:
    """Return the offset of ``va`` within its page."""
    return _u64(va) & 0xFFF


def va_parts(va: int) -> tuple[int, int, int, int]:
    """Return the level 0..3 table indices of a virtual address."""
    va = _u64(va)
    return (
        (va & 0xFF8000000000) >> 39,
        (va & 0x7FC0000000) >> 30,
        (va & 0x3FE00000) >> 21,
        (va & 0x1FF000) >> 12,
    )


def page_base(addr: int) -> int:
    """Round ``addr`` down to the start of its page."""
    return _u64(addr) & ~(PAGE_SIZE - 1) & U64_MASK


def p2n(addr: int) -> int:
    """Return the page number of a physical address."""
    return _u64(addr) >> 12