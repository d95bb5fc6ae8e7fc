# kernelkit

kernelkit collects small building blocks for a teaching kernel on the QEMU
`virt` AArch64 machine. It is written in plain Python, so you can explore,
test and reason about these pieces without an emulator.

## What is inside

- `kernelkit.arith` provides `round_down`, `round_up`, `bit`, `lo` and `hi`.
  `bit(i)` raises `ValueError` when `i` is outside 0..63.
- `kernelkit.bitmap` provides `Bitmap(size)`, a fixed-size boolean array
  stored in 64-bit cells. It has `get`, `set`, `clear` and `len()`. An index
  out of range raises `IndexError`.
- `kernelkit.format` is a kernel-style printf:
  - `format(fmt, *args)` returns a string.
  - `vformat(put_char, fmt, args)` passes each character of the result to
    `put_char`.

  Both understand `%%`, `%c`, `%s`, `%u`, `%llu`, `%d`, `%lld`, `%x`, `%llx`,
  `%p`, `%zu` and `%zd`. Integers wrap to 32 or 64 bits as the directive
  says, and `%s` of `None` prints `(null)`. For any other directive the `%`
  is printed as written. If there are too few arguments, `TypeError` is
  raised.
- `kernelkit.cstring` provides `memmove`, `memcmp`, `strncpy`,
  `strncpy_fast`, `strncmp` and `strlen`. They follow C semantics on bytes,
  bytearrays and str: strings stop at NUL and lengths are explicit. An out
  of range access raises `IndexError`.
- `kernelkit.rc` provides `RefCount`, a thread-safe counter. It has
  `increment()`, `decrement()` and a `count` property. `decrement()` returns
  True when no references remain.
- `kernelkit.spinlock` provides `SpinLock`. It has `try_acquire`, `acquire`,
  `release` and a `locked` property, and it works as a context manager.
- `kernelkit.lists` provides three containers:
  - `ListNode(value)` is a node of a circular doubly linked list. It has
    `merge`, `insert`, `detach`, `is_empty`, and iteration that starts after
    the node and ends with it.
  - `AtomicStack` is a LIFO. It has `push`, `pop` (which returns None when
    the stack is empty) and `pop_all` (which returns the newest item first).
  - `Queue` is a FIFO. It has `push`, `pop`, `front`, `empty` and `len()`.
    `pop` and `front` raise `IndexError` when the queue is empty. Hold its
    spin lock with `with queue:`.
- `kernelkit.rbtree` provides `RBTree(less)`, a red-black tree of unique
  items ordered by a strict "less than" function. It has the following
  operations:
  - `insert` raises `KeyError` on a duplicate.
  - `erase` raises `KeyError` when the item is missing.
  - `lookup` returns the stored item or None.
  - `first` returns the smallest item or None.
  - `validate` checks every invariant and returns the black height.
  - `len()` and in-order iteration.
- `kernelkit.mmu` provides the page-table entry constants and the memory
  layout of the virt machine. Its functions are `k2p`, `p2k`, `kspace`,
  `pspace`, `pte_address`, `pte_flags`, `va_offset`, `va_parts`, `page_base`
  and `p2n`. They raise `ValueError` for values that are not 64-bit unsigned.
- `kernelkit.trap` reads exception syndrome register values:
  - `decode_esr(esr)` returns a `Syndrome` with `ec`, `iss`, `ir` and
    `exception_class`.
  - `classify(esr)` returns a `TrapAction`: `INTERRUPT`, `SYSCALL` or
    `PAGE_FAULT`. Where the kernel would panic it raises `UnknownException`.
- `kernelkit.kernel_pt` holds the boot page tables:
  - `lv2_device_table()` leaves the boot ROM unmapped and maps the devices.
  - `lv2_ram_table()` maps 1..2 GB as kernel data.
  - `build_kernel_page_tables(table_base)` places the tables in consecutive
    pages and returns a `KernelPageTables`.
  - `KernelPageTables.translate(va)` walks the tables and raises `PageFault`
    for unmapped addresses.

## Installing

```
pip install .
pip install ".[test]"
```

## Examples

```python
from kernelkit.format import format
from kernelkit.rbtree import RBTree
from kernelkit.mmu import k2p, va_parts
from kernelkit.kernel_pt import build_kernel_page_tables

format("cpu %d: %llx %s", 2, 0xdead, "ok")    # 'cpu 2: dead ok'

tree = RBTree(lambda a, b: a < b)
for key in (5, 1, 3):
    tree.insert(key)
tree.first()                                   # 1
list(tree)                                     # [1, 3, 5]

k2p(0xFFFF000040000000)                        # 0x40000000
va_parts(0x40201000)                           # (0, 1, 1, 1)

tables = build_kernel_page_tables(0x1000)
hex(tables.translate(0x40201234))              # '0x40201234'
```

## What it does not do

kernelkit models data structures and register layouts. It does not run on
hardware or in an emulator, so it has no drivers, no interrupt controller,
no scheduler and no process management. Trap handling stops at deciding
what kind of exception occurred. Nothing in it boots.

## Running the tests

```
pytest
```