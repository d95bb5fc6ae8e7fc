"""Small integer helpers used throughout the kernel code."""

U32_MASK = 0xFFFFFFFF
U64_BITS = 64


def round_down(a: int, b: int) -> int:
    """Return the largest multiple of ``b`` that is not greater than ``a``."""
    return a - a % b


def round_up(a: int, b: int) -> int:
    """Return the smallest multiple of ``b`` that is not less than ``a``."""
    return round_down(a + b - 1, b)


def bit(i: int) -> int:
    """Return a 64-bit word with only bit ``i`` set."""
    if not 0 <= i < U64_BITS:
        raise ValueError(f"bit index {i} outside 0..{U64_BITS - 1}")
    return 1 << i


def lo(value: int) -> int:
    """Return the low 32 bits of ``value``."""
    return value & U32_MASK


def hi(value: int) -> int:
    """Return bits 32..63 of ``value``."""
    return (value >> 32) & U32_MASK