"""Circular doubly linked lists, a lock-free style stack and a locked FIFO queue."""

import threading
from collections import deque
from typing import Any, Iterator, Optional

from kernelkit.spinlock import SpinLock


class ListNode:
    """One node of a circular doubly linked list.

    A freshly created node forms a list of its own.
    """

    __slots__ = ("value", "prev", "next")

    def __init__(self, value: Any = None):
        self.value = value
        self.prev: "ListNode" = self
        self.next: "ListNode" = self

    def _reset(self) -> None:
        self.prev = self
        self.next = self

    def merge(self, other: Optional["ListNode"]) -> "ListNode":
        """Join the list holding ``other`` into this one, right after this node.

        Afterwards ``self.next is other``. Returns the merged list.
        """
        if other is None:
            return self
        after_self = self.next
        before_other = other.prev
        self.next = other
        other.prev = self
        before_other.next = after_self
        after_self.prev = before_other
        return self

    def insert(self, node: "ListNode") -> "ListNode":
        """Make ``node`` a single-node list and insert it right after this node."""
        node._reset()
        return self.merge(node)

    def detach(self) -> Optional["ListNode"]:
        """Remove this node from its list.

        Returns the node that preceded it, or None if it was the only node.
        """
        prev = self.prev
        self.prev.next = self.next
        self.next.prev = self.prev
        self._reset()
        return None if prev is self else prev

    def is_empty(self) -> bool:
        """Whether this node is alone in its list."""
        return self.next is self

    def __iter__(self) -> Iterator["ListNode"]:
        """Walk the list starting after this node and ending with this node."""
        node = self.next
        while True:
            yield node
            if node is self:
                return
            node = node.next

    def __repr__(self) -> str:
        return f"ListNode({self.value!r})"


class AtomicStack:
    """A last-in first-out stack whose operations are atomic."""

    def __init__(self):
        self._items: list = []
        self._lock = threading.Lock()

    def push(self, item: Any) -> Any:
        """Add ``item`` and return it."""
        with self._lock:
            self._items.append(item)
        return item

    def pop(self) -> Any:
        """Remove and return the most recently added item, or None if empty."""
        with self._lock:
            return self._items.pop() if self._items else None

    def pop_all(self) -> list:
        """Remove every item and return them, most recently added first."""
        with self._lock:
            items, self._items = self._items, []
        items.reverse()
        return items


class Queue:
    """A FIFO queue guarded by a spin lock taken with ``with queue:``."""

    def __init__(self):
        self._items: deque = deque()
        self._lock = SpinLock()

    def push(self, item: Any) -> None:
        """Append ``item`` at the back."""
        self._items.append(item)

    def pop(self) -> Any:
        """Remove and return the front item."""
        if not self._items:
            raise IndexError("pop from an empty queue")
        return self._items.popleft()

    def front(self) -> Any:
        """Return the front item without removing it."""
        if not self._items:
            raise IndexError("front of an empty queue")
        return self._items[0]

    def empty(self) -> bool:
        """Whether the queue holds no items."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __enter__(self) -> "Queue":
        self._lock.acquire()
        return self

    def __exit__(self, *args) -> None:
        self._lock.release()