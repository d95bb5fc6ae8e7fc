"""Byte-string routines with C semantics: NUL terminators and explicit lengths."""

from itertools import chain, islice, repeat
from typing import Iterator, Union

BytesLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _chars(s: bytes, n: int) -> Iterator[int]:
    """Yield ``n`` bytes of ``s``, reading past its end as NUL."""
    return islice(chain(s, repeat(0)), n)


def memmove(buf: bytearray, dest: int, src: int, n: int) -> bytearray:
    """Copy ``n`` bytes from offset ``src`` to ``dest`` within ``buf``; overlap is safe."""
    if n < 0 or dest < 0 or src < 0 or max(dest, src) + n > len(buf):
        raise IndexError("memmove range outside buffer")
    buf[dest:dest + n] = buf[src:src + n]
    return buf


def memcmp(s1: BytesLike, s2: BytesLike, n: int) -> int:
    """Compare the first ``n`` bytes; return the difference at the first mismatch."""
    a, b = _as_bytes(s1), _as_bytes(s2)
    for c1, c2 in zip(a[:n], b[:n]):
        if c1 != c2:
            return c1 - c2
    if min(len(a), len(b)) < n:
        raise IndexError("memcmp length exceeds operand size")
    return 0


def _copy_prefix(dest: bytearray, src: BytesLike, n: int) -> int:
    if n > len(dest):
        raise IndexError("destination shorter than n")
    data = _as_bytes(src)[:n].split(b"\0", 1)[0]
    dest[:len(data)] = data
    return len(data)


def strncpy(dest: bytearray, src: BytesLike, n: int) -> bytearray:
    """Copy at most ``n`` bytes of ``src`` into ``dest``, padding the rest of ``n`` with NUL."""
    copied = _copy_prefix(dest, src, n)
    dest[copied:n] = bytes(n - copied)
    return dest


def strncpy_fast(dest: bytearray, src: BytesLike, n: int) -> bytearray:
    """Copy at most ``n`` bytes of ``src``, writing a single NUL terminator if room remains."""
    copied = _copy_prefix(dest, src, n)
    if copied < n:
        dest[copied] = 0
    return dest


def strncmp(s1: BytesLike, s2: BytesLike, n: int) -> int:
    """Compare at most ``n`` characters of two NUL-terminated strings."""
    for c1, c2 in zip(_chars(_as_bytes(s1), n), _chars(_as_bytes(s2), n)):
        if c1 != c2:
            return c1 - c2
        if c1 == 0:
            break
    return 0


def strlen(s: BytesLike) -> int:
    """Return the number of bytes before the first NUL."""
    data = _as_bytes(s)
    terminator = data.find(b"\0")
    return len(data) if terminator < 0 else terminator