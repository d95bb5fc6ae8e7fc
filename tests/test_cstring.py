import pytest
from hypothesis import given
from hypothesis import strategies as st

from kernelkit.cstring import memcmp, memmove, strlen, strncmp, strncpy, strncpy_fast


@st.composite
def move_cases(draw):
    data = draw(st.binary(min_size=1, max_size=64))
    n = draw(st.integers(min_value=0, max_value=len(data)))
    src = draw(st.integers(min_value=0, max_value=len(data) - n))
    dest = draw(st.integers(min_value=0, max_value=len(data) - n))
    return data, dest, src, n


@given(move_cases())
def test_memmove_copies_source_even_when_overlapping(case):
    data, dest, src, n = case
    buf = bytearray(data)
    result = memmove(buf, dest, src, n)
    assert result is buf
    assert bytes(buf[dest:dest + n]) == data[src:src + n]
    assert bytes(buf[:dest]) == data[:dest]
    assert bytes(buf[dest + n:]) == data[dest + n:]
    assert len(buf) == len(data)


def test_memmove_out_of_range():
    with pytest.raises(IndexError):
        memmove(bytearray(4), 2, 0, 3)


@given(st.binary(max_size=32))
def test_memcmp_equal(data):
    assert memcmp(data, bytes(data), len(data)) == 0


def test_memcmp_reports_difference():
    assert memcmp(b"abc", b"abd", 3) == ord("c") - ord("d")
    assert memcmp(b"abd", b"abc", 3) > 0
    assert memcmp(b"abc", b"abd", 2) == 0


def test_memcmp_too_short():
    with pytest.raises(IndexError):
        memcmp(b"ab", b"ab", 5)


def test_strncpy_pads_with_zeros():
    dest = bytearray(b"xxxxxxxxxx")
    result = strncpy(dest, b"hi", 8)
    assert result is dest
    assert bytes(dest[:8]) == b"hi" + bytes(6)
    assert bytes(dest[8:]) == b"xx"


def test_strncpy_truncates_without_terminator():
    dest = bytearray(4)
    strncpy(dest, b"abcdef", 4)
    assert bytes(dest) == b"abcd"


def test_strncpy_fast_writes_single_terminator():
    dest = bytearray(b"xxxxxxxx")
    strncpy_fast(dest, b"hi", 8)
    assert bytes(dest) == b"hi\0" + b"xxxxx"


def test_strncpy_fast_stops_at_source_nul():
    dest = bytearray(b"xxxxxx")
    strncpy_fast(dest, b"ab\0cd", 6)
    assert bytes(dest) == b"ab\0" + b"xxx"


def test_strncpy_destination_too_small():
    with pytest.raises(IndexError):
        strncpy(bytearray(2), b"abc", 3)


def test_strncmp_ignores_text_after_nul():
    assert strncmp(b"abc\0x", b"abc\0y", 10) == 0


def test_strncmp_limited_by_n():
    assert strncmp(b"abcdef", b"abcxyz", 3) == 0
    assert strncmp(b"abcdef", b"abcxyz", 4) == ord("d") - ord("x")


def test_strncmp_prefix_is_smaller():
    assert strncmp(b"ab", b"abc", 5) == -ord("c")


@given(st.binary(max_size=32))
def test_strncmp_reflexive(data):
    assert strncmp(data, data, len(data) + 1) == 0


def test_strlen_stops_at_nul():
    assert strlen(b"abc\0def") == len(b"abc")
    assert strlen("") == 0


@given(st.binary().filter(lambda b: b"\0" not in b))
def test_strlen_without_nul_is_length(data):
    assert strlen(data) == len(data)
    assert strlen(data + b"\0tail") == len(data)