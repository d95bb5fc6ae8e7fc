"""Minimal printf-style formatting used by the kernel console."""

import operator
from typing import Callable, Iterable, Iterator, NamedTuple

_DIGITS = "0123456789abcdef"


class _IntSpec(NamedTuple):
    token: str
    bits: int
    signed: bool
    base: int


# Order matters: the first matching token wins.
_INT_SPECS = (
    _IntSpec("u", 32, False, 10),
    _IntSpec("llu", 64, False, 10),
    _IntSpec("d", 32, True, 10),
    _IntSpec("lld", 64, True, 10),
    _IntSpec("x", 32, False, 16),
    _IntSpec("llx", 64, False, 16),
    _IntSpec("p", 64, False, 16),
    _IntSpec("zu", 64, False, 10),
    _IntSpec("zd", 64, True, 10),
)


def _render_int(value: int, spec: _IntSpec) -> str:
    width = 1 << spec.bits
    value = operator.index(value) & (width - 1)
    if spec.signed and value >= width >> 1:
        value -= width
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    digits = []
    while True:
        magnitude, digit = divmod(magnitude, spec.base)
        digits.append(_DIGITS[digit])
        if not magnitude:
            break
    return sign + "".join(reversed(digits))


def _next_arg(arguments: Iterator):
    try:
        return next(arguments)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _render_char(value) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character")
        return value
    return chr(operator.index(value) & 0xFF)


def _render_str(value) -> str:
    if value is None:
        return "(null)"
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("latin-1")
    return str(value).split("\0", 1)[0]


def vformat(put_char: Callable[[str], None], fmt: str, args: Iterable) -> None:
    """Format ``fmt`` with ``args``, passing each output character to ``put_char``."""
    arguments = iter(args)
    fmt = fmt.split("\0", 1)[0]
    pos = 0
    end = len(fmt)
    while pos < end:
        c = fmt[pos]
        pos += 1
        if c != "%":
            put_char(c)
            continue

        if fmt.startswith("%", pos):
            put_char("%")
            pos += 1
        elif fmt.startswith("c", pos):
            put_char(_render_char(_next_arg(arguments)))
            pos += 1
        elif fmt.startswith("s", pos):
            for ch in _render_str(_next_arg(arguments)):
                put_char(ch)
            pos += 1
        else:
            spec = next((s for s in _INT_SPECS if fmt.startswith(s.token, pos)), None)
            if spec is None:
                put_char("%")
                continue
            for ch in _render_int(_next_arg(arguments), spec):
                put_char(ch)
            pos += len(spec.token)


def format(fmt: str, *args) -> str:
    """Return ``fmt`` formatted with ``args`` as a string."""
    chars: list[str] = []
    vformat(chars.append, fmt, args)
    return "".join(chars)