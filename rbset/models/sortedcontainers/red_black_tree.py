"""
Red-Black Tree implementation of an ordered set of unique values.

Worst-case O(log N) insert, remove and search.
"""

import logging
from collections.abc import AsyncIterator, Callable, Iterable, Iterator
from typing import Any, TypeVar

from rbset.interfaces.sorted_container import SortedContainer
from rbset.models.exceptions import EmptyContainerError, InvariantViolationError
from rbset.models.node import NIL, Color, NodeArena
from rbset.models.traversal import WALKERS, TraversalOrder, inorder, levelorder, postorder

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RedBlackTree(SortedContainer[T]):
    """
    Red-Black Tree implementation of SortedContainer.

    Properties maintained:
    1. Every node is either red or black
    2. Root is always black
    3. Red nodes cannot have red children
    4. Every path from a node to NIL has the same number of black nodes

    Nodes are stored in a NodeArena owned by this tree; links are integer
    handles and NIL stands for an absent child or parent.
    """

    DEFAULT_CHECK_INVARIANTS = False

    def __init__(
        self,
        values: Iterable[T] | None = None,
        *,
        check_invariants: bool = DEFAULT_CHECK_INVARIANTS,
    ) -> None:
        """
        Initialize the tree.

        Args:
            values: Optional values to insert, in order. Duplicates are skipped.
            check_invariants: Run validate() after every mutation (debug aid).
        """
        if not isinstance(check_invariants, bool):
            raise TypeError(
                f"check_invariants must be a bool, got {type(check_invariants).__name__}"
            )

        self._arena: NodeArena[T] = NodeArena()
        self._root: int = NIL
        self._size: int = 0
        # Bumped on every structural change; live iterators compare against it
        self._version: int = 0
        self._check_invariants = check_invariants

        if values is not None:
            for value in values:
                self.insert(value)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def insert(self, value: T) -> None:
        """Insert a value if absent. O(log N)"""
        self.add(value)

    def add(self, value: T) -> bool:
        """
        Insert a value if absent.

        Returns:
            True if the value was inserted, False if it was already present.
        """
        nodes = self._arena
        parent = NIL
        current = self._root

        while current != NIL:
            parent = current
            node = nodes[current]
            if value < node.value:
                current = node.left
            elif value > node.value:
                current = node.right
            else:
                logger.debug(f"Ignoring duplicate insert of {value!r}")
                return False

        new_node = nodes.allocate(value)
        nodes[new_node].parent = parent
        if parent == NIL:
            self._root = new_node
        elif value < nodes[parent].value:
            nodes[parent].left = new_node
        else:
            nodes[parent].right = new_node

        self._fix_insert(new_node)
        self._size += 1
        self._after_mutation("insert")
        return True

    def _fix_insert(self, node: int) -> None:
        """Fix Red-Black Tree properties after insert."""
        nodes = self._arena
        while nodes.color(nodes[node].parent) == Color.RED:
            parent = nodes[node].parent
            # A red parent is never the root, so the grandparent is real
            grandparent = nodes[parent].parent

            if parent == nodes[grandparent].left:
                uncle = nodes[grandparent].right

                if nodes.color(uncle) == Color.RED:
                    # Case 1: Uncle is red
                    nodes[parent].color = Color.BLACK
                    nodes[uncle].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    node = grandparent
                else:
                    if node == nodes[parent].right:
                        # Case 2: Node is right child
                        node = parent
                        self._rotate_left(node)
                        parent = nodes[node].parent

                    # Case 3: Node is left child
                    nodes[parent].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    self._rotate_right(grandparent)
            else:
                uncle = nodes[grandparent].left

                if nodes.color(uncle) == Color.RED:
                    nodes[parent].color = Color.BLACK
                    nodes[uncle].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    node = grandparent
                else:
                    if node == nodes[parent].left:
                        node = parent
                        self._rotate_right(node)
                        parent = nodes[node].parent

                    nodes[parent].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    self._rotate_left(grandparent)

        nodes[self._root].color = Color.BLACK

    # ------------------------------------------------------------------
    # Rotations
    # ------------------------------------------------------------------

    def _rotate_left(self, node: int) -> int:
        """Left rotation. Returns the new subtree root."""
        nodes = self._arena
        right_child = nodes[node].right
        if right_child == NIL:
            raise RuntimeError(f"Cannot rotate node {node} left: no right child")

        pivot = nodes[right_child]
        rotated = nodes[node]

        rotated.right = pivot.left
        if pivot.left != NIL:
            nodes[pivot.left].parent = node

        pivot.parent = rotated.parent

        if rotated.parent == NIL:
            self._root = right_child
        elif node == nodes[rotated.parent].left:
            nodes[rotated.parent].left = right_child
        else:
            nodes[rotated.parent].right = right_child

        pivot.left = node
        rotated.parent = right_child
        return right_child

    def _rotate_right(self, node: int) -> int:
        """Right rotation. Returns the new subtree root."""
        nodes = self._arena
        left_child = nodes[node].left
        if left_child == NIL:
            raise RuntimeError(f"Cannot rotate node {node} right: no left child")

        pivot = nodes[left_child]
        rotated = nodes[node]

        rotated.left = pivot.right
        if pivot.right != NIL:
            nodes[pivot.right].parent = node

        pivot.parent = rotated.parent

        if rotated.parent == NIL:
            self._root = left_child
        elif node == nodes[rotated.parent].right:
            nodes[rotated.parent].right = left_child
        else:
            nodes[rotated.parent].left = left_child

        pivot.right = node
        rotated.parent = left_child
        return left_child

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def remove(self, value: T) -> None:
        """Remove a value if present. O(log N)"""
        self.discard(value)

    def discard(self, value: T) -> bool:
        """
        Remove a value if present.

        Returns:
            True if the value was found and removed, False otherwise.
        """
        node = self._find_node(value)
        if node == NIL:
            logger.debug(f"Ignoring remove of absent value {value!r}")
            return False

        self._delete_node(node)
        self._size -= 1
        self._after_mutation("remove")
        return True

    def _transplant(self, dest: int, target: int) -> None:
        """Put ``target`` in the child slot ``dest`` occupies under its parent."""
        nodes = self._arena
        parent = nodes[dest].parent
        if parent == NIL:
            self._root = target
        elif dest == nodes[parent].left:
            nodes[parent].left = target
        else:
            nodes[parent].right = target

        if target != NIL:
            nodes[target].parent = parent

    def _delete_node(self, node: int) -> None:
        """Splice ``node`` out of the tree, rebalance and release its slot."""
        nodes = self._arena
        removed = nodes[node]
        removed_color = removed.color

        # The node that moves into the vacated position, and its new parent.
        # Tracked separately because the child may be NIL.
        if removed.left == NIL:
            child = removed.right
            child_parent = removed.parent
            self._transplant(node, child)
        elif removed.right == NIL:
            child = removed.left
            child_parent = removed.parent
            self._transplant(node, child)
        else:
            successor = self._minimum(removed.right)
            moved = nodes[successor]
            removed_color = moved.color
            child = moved.right

            if moved.parent == node:
                child_parent = successor
            else:
                child_parent = moved.parent
                self._transplant(successor, child)
                moved.right = removed.right
                nodes[moved.right].parent = successor

            self._transplant(node, successor)
            moved.left = removed.left
            nodes[moved.left].parent = successor
            moved.color = removed.color

        if removed_color == Color.BLACK:
            self._fix_delete(child, child_parent)

        nodes.release(node)

    def _fix_delete(self, node: int, parent: int) -> None:
        """
        Fix Red-Black Tree properties after removing a black node.

        ``node`` carries an extra black and may be NIL; ``parent`` is its parent.
        """
        nodes = self._arena
        while node != self._root and nodes.color(node) == Color.BLACK:
            above = nodes[parent]

            if node == above.left:
                sibling = above.right

                if nodes.color(sibling) == Color.RED:
                    # Case 1: Sibling is red
                    nodes[sibling].color = Color.BLACK
                    above.color = Color.RED
                    self._rotate_left(parent)
                    sibling = above.right

                # The sibling side carries at least one black, so it is real
                near = nodes[sibling]
                if (
                    nodes.color(near.left) == Color.BLACK
                    and nodes.color(near.right) == Color.BLACK
                ):
                    # Case 2: Both of sibling's children are black
                    near.color = Color.RED
                    node = parent
                    parent = above.parent
                else:
                    if nodes.color(near.right) == Color.BLACK:
                        # Case 3: Sibling's outer child is black
                        nodes[near.left].color = Color.BLACK
                        near.color = Color.RED
                        self._rotate_right(sibling)
                        sibling = above.right
                        near = nodes[sibling]

                    # Case 4: Sibling's outer child is red
                    near.color = above.color
                    above.color = Color.BLACK
                    nodes[near.right].color = Color.BLACK
                    self._rotate_left(parent)
                    node = self._root
                    parent = NIL
            else:
                sibling = above.left

                if nodes.color(sibling) == Color.RED:
                    nodes[sibling].color = Color.BLACK
                    above.color = Color.RED
                    self._rotate_right(parent)
                    sibling = above.left

                near = nodes[sibling]
                if (
                    nodes.color(near.right) == Color.BLACK
                    and nodes.color(near.left) == Color.BLACK
                ):
                    near.color = Color.RED
                    node = parent
                    parent = above.parent
                else:
                    if nodes.color(near.left) == Color.BLACK:
                        nodes[near.right].color = Color.BLACK
                        near.color = Color.RED
                        self._rotate_left(sibling)
                        sibling = above.left
                        near = nodes[sibling]

                    near.color = above.color
                    above.color = Color.BLACK
                    nodes[near.left].color = Color.BLACK
                    self._rotate_right(parent)
                    node = self._root
                    parent = NIL

        if node != NIL:
            nodes[node].color = Color.BLACK

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, value: T) -> bool:
        return self._find_node(value) != NIL

    def __contains__(self, value: object) -> bool:
        """Membership test; a value that cannot be compared with the stored ones is absent."""
        try:
            return self.search(value)  # type: ignore[arg-type]
        except TypeError:
            return False

    def min(self) -> T:
        if self._root == NIL:
            raise EmptyContainerError("min")
        return self._arena[self._minimum(self._root)].value

    def max(self) -> T:
        if self._root == NIL:
            raise EmptyContainerError("max")
        return self._arena[self._maximum(self._root)].value

    def successor(self, value: T) -> T:
        """Return the smallest stored value greater than ``value``; KeyError if none."""
        nodes = self._arena
        node = self._find_node(value)
        if node == NIL:
            raise KeyError(value)

        if nodes[node].right != NIL:
            return nodes[self._minimum(nodes[node].right)].value

        # Walk up until we leave a left subtree
        above = nodes[node].parent
        while above != NIL and node == nodes[above].right:
            node = above
            above = nodes[above].parent
        if above == NIL:
            raise KeyError(f"No successor for {value!r}")
        return nodes[above].value

    def predecessor(self, value: T) -> T:
        """Return the largest stored value smaller than ``value``; KeyError if none."""
        nodes = self._arena
        node = self._find_node(value)
        if node == NIL:
            raise KeyError(value)

        if nodes[node].left != NIL:
            return nodes[self._maximum(nodes[node].left)].value

        above = nodes[node].parent
        while above != NIL and node == nodes[above].left:
            node = above
            above = nodes[above].parent
        if above == NIL:
            raise KeyError(f"No predecessor for {value!r}")
        return nodes[above].value

    def size(self) -> int:
        return self._size

    def empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def _find_node(self, value: T) -> int:
        """Find node by value; NIL if absent."""
        nodes = self._arena
        current = self._root
        while current != NIL:
            node = nodes[current]
            if value < node.value:
                current = node.left
            elif value > node.value:
                current = node.right
            else:
                return current
        return NIL

    def _minimum(self, node: int) -> int:
        nodes = self._arena
        while nodes[node].left != NIL:
            node = nodes[node].left
        return node

    def _maximum(self, node: int) -> int:
        nodes = self._arena
        while nodes[node].right != NIL:
            node = nodes[node].right
        return node

    # ------------------------------------------------------------------
    # Traversal and iteration
    # ------------------------------------------------------------------

    def walk(self, order: TraversalOrder = TraversalOrder.IN) -> Iterator[T]:
        """
        Iterate over stored values in the given order.

        Args:
            order: A TraversalOrder, or its string value ("pre", "in", "post", "level").

        Raises:
            RuntimeError: On the next step after the tree was mutated.
        """
        walker = WALKERS[TraversalOrder(order)]
        return self._walk(walker(self._arena, self._root), self._arena, self._version)

    def _walk(
        self, handles: Iterator[int], arena: NodeArena[T], version: int
    ) -> Iterator[T]:
        self._check_version(version)
        for handle in handles:
            yield arena[handle].value
            self._check_version(version)

    def traverse(
        self, order: TraversalOrder, visitor: Callable[[T], object]
    ) -> None:
        for value in self.walk(order):
            visitor(value)

    def __iter__(self) -> Iterator[T]:
        return self.iterator()

    def iterator(self, start: T | None = None, end: T | None = None) -> Iterator[T]:
        return _RangeIterator(self, start, end)

    def __aiter__(self) -> AsyncIterator[T]:
        return self.async_iterator()

    def async_iterator(
        self, start: T | None = None, end: T | None = None
    ) -> AsyncIterator[T]:
        return _AsyncRangeIterator(self, start, end)

    def _check_version(self, version: int) -> None:
        if version != self._version:
            raise RuntimeError("RedBlackTree mutated during iteration")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Release every node, children before parents, and reset to empty."""
        released = 0
        for handle in postorder(self._arena, self._root):
            self._arena.release(handle)
            released += 1

        self._arena.reset()
        self._root = NIL
        self._size = 0
        self._version += 1
        logger.debug(f"Cleared RedBlackTree ({released} nodes released)")

    def copy(self) -> "RedBlackTree[T]":
        """
        Return an independent tree with the same values.

        The copy is rebuilt by re-inserting values in level order, so its
        shape and colors may differ from this tree's.
        """
        clone: RedBlackTree[T] = type(self)(check_invariants=self._check_invariants)
        for value in self.walk(TraversalOrder.LEVEL):
            clone.insert(value)
        return clone

    __copy__ = copy

    def swap(self, other: "RedBlackTree[T]") -> None:
        """Exchange contents with another tree in O(1)."""
        if not isinstance(other, RedBlackTree):
            raise TypeError(f"Cannot swap RedBlackTree with {type(other).__name__}")

        self._arena, other._arena = other._arena, self._arena
        self._root, other._root = other._root, self._root
        self._size, other._size = other._size, self._size
        self._version += 1
        other._version += 1
        logger.debug(f"Swapped trees (sizes now {self._size} and {other._size})")

    def take(self) -> "RedBlackTree[T]":
        """Move contents into a new tree, leaving this one empty."""
        moved: RedBlackTree[T] = type(self)(check_invariants=self._check_invariants)
        moved.swap(self)
        logger.debug(f"Moved {moved._size} values out of tree")
        return moved

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RedBlackTree):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def dump(self) -> str:
        """Level-order listing of ``value(color)`` pairs, e.g. ``10(B), 5(R)``."""
        nodes = self._arena
        return ", ".join(
            f"{nodes[handle].value}({'R' if nodes[handle].color == Color.RED else 'B'})"
            for handle in levelorder(nodes, self._root)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def validate(self) -> None:
        """
        Verify ordering, red-black properties, parent links and size.

        Raises:
            InvariantViolationError: Describing the first violation found.
        """
        nodes = self._arena
        live = len(nodes)

        if self._root == NIL:
            if self._size != 0 or live != 0:
                raise InvariantViolationError(
                    f"empty root but size={self._size}, live nodes={live}"
                )
            return

        root = nodes[self._root]
        if root.parent != NIL:
            raise InvariantViolationError("root has a parent")
        if root.color != Color.BLACK:
            raise InvariantViolationError("root is not black")

        # Ordering, uniqueness and reachability
        count = 0
        previous: Any = None
        for handle in inorder(nodes, self._root):
            count += 1
            if count > live:
                raise InvariantViolationError("more reachable nodes than live nodes")
            value = nodes[handle].value
            if count > 1 and not previous < value:
                raise InvariantViolationError(
                    f"values out of order or duplicated: {previous!r} before {value!r}"
                )
            previous = value

        if count != self._size:
            raise InvariantViolationError(f"size is {self._size} but {count} nodes reachable")
        if count != live:
            raise InvariantViolationError(f"{live} live nodes but {count} reachable")

        black_heights: dict[int, int] = {NIL: 1}
        for handle in postorder(nodes, self._root):
            node = nodes[handle]
            for child in (node.left, node.right):
                if child != NIL and nodes[child].parent != handle:
                    raise InvariantViolationError(
                        f"parent link of {nodes[child].value!r} does not point to {node.value!r}"
                    )

            if node.color == Color.RED and (
                nodes.color(node.left) == Color.RED or nodes.color(node.right) == Color.RED
            ):
                raise InvariantViolationError(f"red node {node.value!r} has a red child")

            left_height = black_heights[node.left]
            right_height = black_heights[node.right]
            if left_height != right_height:
                raise InvariantViolationError(
                    f"black-height mismatch under {node.value!r}: "
                    f"{left_height} left, {right_height} right"
                )
            black_heights[handle] = left_height + (1 if node.color == Color.BLACK else 0)

    def _after_mutation(self, operation: str) -> None:
        self._version += 1
        if not self._check_invariants:
            return
        try:
            self.validate()
        except InvariantViolationError as e:
            logger.error(f"Invariant check failed after {operation}: {e}")
            raise


class _RangeIterator(Iterator[T]):
    """Iterator for range queries on Red-Black Tree."""

    def __init__(self, tree: RedBlackTree[T], start: T | None, end: T | None) -> None:
        self._tree = tree
        self._arena = tree._arena
        self._version = tree._version
        self._stack: list[int] = []
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(tree._root, start)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        self._tree._check_version(self._version)
        if not self._stack:
            raise StopIteration

        node = self._arena[self._stack.pop()]

        # Check end bound
        if self._end is not None and not node.value < self._end:
            self._stack.clear()
            raise StopIteration

        # Push right subtree's left path
        self._push_left_path(node.right, None)

        return node.value

    def _push_left_path(self, handle: int, start: T | None) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while handle != NIL:
            node = self._arena[handle]
            if start is not None and node.value < start:
                # Skip nodes less than start
                handle = node.right
            else:
                self._stack.append(handle)
                handle = node.left


class _AsyncRangeIterator(AsyncIterator[T]):
    """Async iterator for range queries on Red-Black Tree (in-memory, no I/O)."""

    def __init__(self, tree: RedBlackTree[T], start: T | None, end: T | None) -> None:
        self._inner = _RangeIterator(tree, start, end)

    def __aiter__(self) -> "_AsyncRangeIterator[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return next(self._inner)
        except StopIteration:
            raise StopAsyncIteration from None
