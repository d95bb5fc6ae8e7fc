import pytest
from hypothesis import given
from hypothesis import strategies as st

from kernelkit.kernel_pt import (
    BLOCK_SIZE,
    PageFault,
    build_kernel_page_tables,
    lv2_device_table,
    lv2_ram_table,
)
from kernelkit.mmu import (
    N_PTE_PER_TABLE,
    PAGE_SIZE,
    PGICBASE,
    PHYSTOP,
    PTE_KERNEL_DATA,
    PTE_KERNEL_DEVICE,
    PTE_TABLE,
    PTE_VALID,
    PUARTBASE,
    PVIRTIO0,
    EXTMEM,
    p2k,
    pte_address,
)

BASE = 0x40100000


@pytest.fixture
def tables():
    return build_kernel_page_tables(BASE)


def test_device_table_size_and_rom_invalid():
    table = lv2_device_table()
    assert len(table) == N_PTE_PER_TABLE
    rom_entries = PGICBASE // BLOCK_SIZE
    assert all(not entry & PTE_VALID for entry in table[:rom_entries])


def test_device_table_maps_devices():
    table = lv2_device_table()
    assert table[PGICBASE // BLOCK_SIZE] == PGICBASE | PTE_KERNEL_DEVICE
    assert table[PUARTBASE // BLOCK_SIZE] == PUARTBASE | PTE_KERNEL_DEVICE
    assert table[PVIRTIO0 // BLOCK_SIZE] == PVIRTIO0 | PTE_KERNEL_DEVICE
    last_device = (PVIRTIO0 // BLOCK_SIZE) + 7
    assert table[last_device] & PTE_VALID
    assert all(entry == 0 for entry in table[last_device + 1:])


def test_ram_table_covers_extmem_to_phystop():
    table = lv2_ram_table()
    assert len(table) == N_PTE_PER_TABLE
    assert table[0] == EXTMEM | PTE_KERNEL_DATA
    assert pte_address(table[-1]) + BLOCK_SIZE == PHYSTOP
    assert all(pte_address(e) == EXTMEM + i * BLOCK_SIZE for i, e in enumerate(table))


def test_table_links(tables):
    level0 = tables.level0
    assert level0[0] & 0x3 == PTE_TABLE
    level1 = tables.tables[pte_address(level0[0])]
    assert tables.tables[pte_address(level1[0])] == lv2_device_table()
    assert tables.tables[pte_address(level1[1])] == lv2_ram_table()
    assert all(entry == 0 for entry in level0[1:])
    assert all(entry == 0 for entry in level1[2:])


def test_invalid_table_is_empty(tables):
    assert tables.tables[tables.invalid] == (0,) * N_PTE_PER_TABLE
    assert tables.invalid not in (tables.root,)


def test_translate_uart(tables):
    assert tables.translate(p2k(PUARTBASE)) == PUARTBASE
    assert tables.translate(p2k(PUARTBASE + 0x18)) == PUARTBASE + 0x18


def test_translate_rom_faults(tables):
    with pytest.raises(PageFault) as info:
        tables.translate(p2k(0x1000))
    assert info.value.level == 2


def test_translate_pci_gap_faults(tables):
    with pytest.raises(PageFault) as info:
        tables.translate(p2k(0x20000000))
    assert info.value.level == 2


def test_translate_beyond_phystop_faults(tables):
    with pytest.raises(PageFault) as info:
        tables.translate(p2k(PHYSTOP))
    assert info.value.level == 1


@given(st.integers(min_value=EXTMEM, max_value=PHYSTOP - 1))
def test_translate_ram_identity(pa):
    tables = build_kernel_page_tables(BASE)
    assert tables.translate(p2k(pa)) == pa


@given(st.integers(min_value=PGICBASE, max_value=PVIRTIO0 + 8 * BLOCK_SIZE - 1))
def test_translate_device_identity(pa):
    tables = build_kernel_page_tables(BASE)
    assert tables.translate(p2k(pa)) == pa


@given(st.integers(min_value=0, max_value=1 << 20).map(lambda n: n * PAGE_SIZE))
def test_any_aligned_base_translates_ram(base):
    tables = build_kernel_page_tables(base)
    assert tables.root == base
    assert tables.translate(p2k(EXTMEM)) == EXTMEM


@pytest.mark.parametrize("base", [1, PAGE_SIZE + 8, -PAGE_SIZE])
def test_unaligned_base_rejected(base):
    with pytest.raises(ValueError):
        build_kernel_page_tables(base)


def test_page_fault_carries_address(tables):
    va = p2k(0x100000)
    with pytest.raises(PageFault) as info:
        tables.translate(va)
    assert info.value.va == va