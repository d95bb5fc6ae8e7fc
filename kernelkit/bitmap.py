"""Compact boolean array stored in 64-bit cells."""

BITS_PER_CELL = 64


class Bitmap:
    """A fixed-size array of bits, all cleared on creation."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError("bitmap size must not be negative")
        self._size = size
        self._cells = [0] * ((size + BITS_PER_CELL - 1) // BITS_PER_CELL)

    def _locate(self, index: int) -> tuple[int, int]:
        if not 0 <= index < self._size:
            raise IndexError(f"bit index {index} out of range for size {self._size}")
        return divmod(index, BITS_PER_CELL)

    def get(self, index: int) -> bool:
        """Return whether the bit at ``index`` is set."""
        cell, offset = self._locate(index)
        return bool((self._cells[cell] >> offset) & 1)

    def set(self, index: int) -> None:
        """Set the bit at ``index`` to 1."""
        cell, offset = self._locate(index)
        self._cells[cell] |= 1 << offset

    def clear(self, index: int) -> None:
        """Set the bit at ``index`` to 0."""
        cell, offset = self._locate(index)
        self._cells[cell] &= ~(1 << offset)

    def __len__(self) -> int:
        return self._size