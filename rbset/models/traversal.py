"""
Depth-first and breadth-first walks over an arena-backed tree.

All walks use explicit stacks or queues, so their memory use does not depend
on recursion depth. They yield node handles; callers map them to values.
"""

from collections import deque
from collections.abc import Callable, Iterator
from enum import Enum

from rbset.models.node import NIL, NodeArena


class TraversalOrder(Enum):
    """Order in which a traversal visits stored values."""

    PRE = "pre"
    IN = "in"
    POST = "post"
    LEVEL = "level"


def inorder(arena: NodeArena, root: int) -> Iterator[int]:
    """Yield handles left subtree, node, right subtree."""
    stack: list[int] = []
    current = root
    while stack or current != NIL:
        while current != NIL:
            stack.append(current)
            current = arena[current].left
        current = stack.pop()
        yield current
        current = arena[current].right


def preorder(arena: NodeArena, root: int) -> Iterator[int]:
    """Yield handles node, left subtree, right subtree."""
    if root == NIL:
        return
    stack = [root]
    while stack:
        handle = stack.pop()
        yield handle
        node = arena[handle]
        # Right first so the left subtree is popped first
        if node.right != NIL:
            stack.append(node.right)
        if node.left != NIL:
            stack.append(node.left)


def postorder(arena: NodeArena, root: int) -> Iterator[int]:
    """Yield handles left subtree, right subtree, node (children before parent)."""
    stack: list[int] = []
    last_visited = NIL
    current = root
    while stack or current != NIL:
        if current != NIL:
            stack.append(current)
            current = arena[current].left
            continue

        peek = stack[-1]
        right = arena[peek].right
        if right != NIL and right != last_visited:
            current = right
        else:
            last_visited = stack.pop()
            yield last_visited


def levelorder(arena: NodeArena, root: int) -> Iterator[int]:
    """Yield handles breadth-first, left to right within each level."""
    if root == NIL:
        return
    queue = deque([root])
    while queue:
        handle = queue.popleft()
        yield handle
        node = arena[handle]
        if node.left != NIL:
            queue.append(node.left)
        if node.right != NIL:
            queue.append(node.right)


WALKERS: dict[TraversalOrder, Callable[[NodeArena, int], Iterator[int]]] = {
    TraversalOrder.PRE: preorder,
    TraversalOrder.IN: inorder,
    TraversalOrder.POST: postorder,
    TraversalOrder.LEVEL: levelorder,
}
