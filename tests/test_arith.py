import pytest
from hypothesis import given
from hypothesis import strategies as st

from kernelkit.arith import bit, hi, lo, round_down, round_up

U64 = st.integers(min_value=0, max_value=2**64 - 1)
DIVISORS = st.integers(min_value=1, max_value=2**20)


@given(U64, DIVISORS)
def test_round_down_is_largest_multiple_not_above(a, b):
    result = round_down(a, b)
    assert result % b == 0
    assert result <= a
    assert a - result < b


@given(U64, DIVISORS)
def test_round_up_is_smallest_multiple_not_below(a, b):
    result = round_up(a, b)
    assert result % b == 0
    assert result >= a
    assert result - a < b


@given(U64, DIVISORS)
def test_multiples_are_fixed_points(a, b):
    multiple = round_down(a, b)
    assert round_up(multiple, b) == multiple
    assert round_down(multiple, b) == multiple


def test_round_to_page():
    assert round_up(4097, 4096) == 8192
    assert round_down(4097, 4096) == 4096


def test_round_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        round_down(10, 0)
    with pytest.raises(ZeroDivisionError):
        round_up(10, 0)


@given(st.integers(min_value=0, max_value=63))
def test_bit_has_single_bit_at_position(i):
    value = bit(i)
    assert value.bit_length() == i + 1
    assert value & (value - 1) == 0


@pytest.mark.parametrize("index", [-1, 64, 100])
def test_bit_out_of_range(index):
    with pytest.raises(ValueError):
        bit(index)


@given(U64)
def test_hi_lo_recompose(value):
    assert (hi(value) << 32) | lo(value) == value
    assert lo(value) <= 0xFFFFFFFF
    assert hi(value) <= 0xFFFFFFFF


def test_hi_lo_split_words():
    value = (1 << 32) | 2
    assert lo(value) == 2
    assert hi(value) == 1