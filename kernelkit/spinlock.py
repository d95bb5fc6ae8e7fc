"""Busy-waiting mutual exclusion lock."""

import threading
import time


class SpinLock:
    """A lock acquired by spinning on a test-and-set flag."""

    def __init__(self):
        self._locked = False
        self._guard = threading.Lock()

    def try_acquire(self) -> bool:
        """Take the lock if it is free; return whether it was taken."""
        if self._locked:
            return False
        with self._guard:
            if self._locked:
                return False
            self._locked = True
            return True

    def acquire(self) -> None:
        """Spin until the lock is taken."""
        while not self.try_acquire():
            time.sleep(0)

    def release(self) -> None:
        """Free the lock."""
        with self._guard:
            self._locked = False

    @property
    def locked(self) -> bool:
        """Whether the lock is currently held."""
        return self._locked

    def __enter__(self) -> "SpinLock":
        self.acquire()
        return self

    def __exit__(self, *args) -> None:
        self.release()