"""Thread-safe reference counter."""

import threading


class RefCount:
    """A counter that reports when the last reference has been dropped."""

    def __init__(self):
        self._count = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        """Add one reference."""
        with self._lock:
            self._count += 1

    def decrement(self) -> bool:
        """Drop one reference; return True if no references remain."""
        with self._lock:
            self._count -= 1
            return self._count <= 0

    @property
    def count(self) -> int:
        """Current number of references."""
        return self._count