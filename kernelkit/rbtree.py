"""Red-black tree ordered by a caller-supplied strict "less than" function."""

from typing import Any, Callable, Iterator, Optional


class _Node:
    __slots__ = ("item", "left", "right", "parent", "red")

    def __init__(self, item: Any, parent: Optional["_Node"]):
        self.item = item
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None
        self.parent = parent
        self.red = True


def _is_red(node: Optional[_Node]) -> bool:
    return node is not None and node.red


class RBTree:
    """A balanced binary search tree of unique items.

    Two items are equal when neither is less than the other. The tree does
    no locking of its own.
    """

    def __init__(self, less: Callable[[Any, Any], bool]):
        self._less = less
        self._root: Optional[_Node] = None
        self._size = 0

    def _find(self, probe: Any) -> Optional[_Node]:
        node = self._root
        while node is not None:
            if self._less(probe, node.item):
                node = node.left
            elif self._less(node.item, probe):
                node = node.right
            else:
                return node
        return None

    def _replace_child(self, old: _Node, new: Optional[_Node]) -> None:
        parent = old.parent
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _rotate_left(self, x: _Node) -> None:
        y = x.right
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        y.parent = x.parent
        self._replace_child(x, y)
        y.left = x
        x.parent = y

    def _rotate_right(self, x: _Node) -> None:
        y = x.left
        x.left = y.right
        if y.right is not None:
            y.right.parent = x
        y.parent = x.parent
        self._replace_child(x, y)
        y.right = x
        x.parent = y

    def insert(self, item: Any) -> None:
        """Add ``item``; raise KeyError if an equal item is already present."""
        parent = None
        node = self._root
        go_left = False
        while node is not None:
            parent = node
            if self._less(item, node.item):
                go_left = True
                node = node.left
            elif self._less(node.item, item):
                go_left = False
                node = node.right
            else:
                raise KeyError(item)
        new = _Node(item, parent)
        if parent is None:
            self._root = new
        elif go_left:
            parent.left = new
        else:
            parent.right = new
        self._size += 1
        self._insert_fix(new)

    def _insert_fix(self, node: _Node) -> None:
        while _is_red(node.parent):
            parent = node.parent
            grand = parent.parent
            if parent is grand.left:
                uncle = grand.right
                if _is_red(uncle):
                    parent.red = uncle.red = False
                    grand.red = True
                    node = grand
                    continue
                if node is parent.right:
                    node = parent
                    self._rotate_left(node)
                    parent = node.parent
                parent.red = False
                grand.red = True
                self._rotate_right(grand)
            else:
                uncle = grand.left
                if _is_red(uncle):
                    parent.red = uncle.red = False
                    grand.red = True
                    node = grand
                    continue
                if node is parent.left:
                    node = parent
                    self._rotate_right(node)
                    parent = node.parent
                parent.red = False
                grand.red = True
                self._rotate_left(grand)
        self._root.red = False

    def erase(self, item: Any) -> None:
        """Remove the item equal to ``item``; raise KeyError if there is none."""
        target = self._find(item)
        if target is None:
            raise KeyError(item)
        if target.left is not None and target.right is not None:
            removed = target.right
            while removed.left is not None:
                removed = removed.left
            target.item = removed.item
        else:
            removed = target
        child = removed.left if removed.left is not None else removed.right
        parent = removed.parent
        if child is not None:
            child.parent = parent
        self._replace_child(removed, child)
        self._size -= 1
        if not removed.red:
            self._erase_fix(child, parent)

    def _erase_fix(self, node: Optional[_Node], parent: Optional[_Node]) -> None:
        while node is not self._root and not _is_red(node):
            if node is parent.left:
                sibling = parent.right
                if sibling.red:
                    sibling.red = False
                    parent.red = True
                    self._rotate_left(parent)
                    sibling = parent.right
                if not _is_red(sibling.left) and not _is_red(sibling.right):
                    sibling.red = True
                    node = parent
                    parent = node.parent
                    continue
                if not _is_red(sibling.right):
                    sibling.left.red = False
                    sibling.red = True
                    self._rotate_right(sibling)
                    sibling = parent.right
                sibling.red = parent.red
                parent.red = False
                sibling.right.red = False
                self._rotate_left(parent)
            else:
                sibling = parent.left
                if sibling.red:
                    sibling.red = False
                    parent.red = True
                    self._rotate_right(parent)
                    sibling = parent.left
                if not _is_red(sibling.left) and not _is_red(sibling.right):
                    sibling.red = True
                    node = parent
                    parent = node.parent
                    continue
                if not _is_red(sibling.left):
                    sibling.right.red = False
                    sibling.red = True
                    self._rotate_left(sibling)
                    sibling = parent.left
                sibling.red = parent.red
                parent.red = False
                sibling.left.red = False
                self._rotate_right(parent)
            node = self._root
            break
        if node is not None:
            node.red = False

    def lookup(self, probe: Any) -> Any:
        """Return the stored item equal to ``probe``, or None."""
        node = self._find(probe)
        return None if node is None else node.item

    def first(self) -> Any:
        """Return the smallest item, or None if the tree is empty."""
        node = self._root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node.item

    def validate(self) -> int:
        """Check every red-black and ordering invariant.

        Returns the black height, counting the empty leaves, so an empty
        tree has height 1. Raises ValueError on a violated invariant.
        """
        if _is_red(self._root):
            raise ValueError("root is red")
        if self._root is not None and self._root.parent is not None:
            raise ValueError("root has a parent")
        count = 0

        def walk(node: Optional[_Node]) -> int:
            nonlocal count
            if node is None:
                return 1
            count += 1
            for child in (node.left, node.right):
                if child is not None and child.parent is not node:
                    raise ValueError("broken parent link")
                if node.red and _is_red(child):
                    raise ValueError("red node has a red child")
            if node.left is not None and not self._less(node.left.item, node.item):
                raise ValueError("left child not less than parent")
            if node.right is not None and not self._less(node.item, node.right.item):
                raise ValueError("right child not greater than parent")
            left, right = walk(node.left), walk(node.right)
            if left != right:
                raise ValueError("unequal black heights")
            return left + (0 if node.red else 1)

        height = walk(self._root)
        if count != self._size:
            raise ValueError("size does not match node count")
        items = list(self)
        if any(not self._less(a, b) for a, b in zip(items, items[1:])):
            raise ValueError("in-order traversal not sorted")
        return height

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        stack: list[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.item
            node = node.right