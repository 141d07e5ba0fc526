"""
In-memory ordered set backed by a red-black tree.

This package provides an ordered container of unique values with:
- insert(value) / remove(value) - O(log N), silent no-op on duplicate / absent
- search(value) - O(log N)
- min() / max() - O(log N), EmptyContainerError when empty
- traverse(order, visitor) - pre, in, post and level order
- iterator(start, end) - range iteration over [start, end)
- copy(), swap(), take(), clear() - whole-tree lifecycle
"""

from rbset.models.exceptions import (
    EmptyContainerError,
    InvariantViolationError,
    RedBlackTreeError,
)
from rbset.models.node import Color
from rbset.models.sortedcontainers import RedBlackTree
from rbset.models.traversal import TraversalOrder

__all__ = [
    "RedBlackTree",
    "TraversalOrder",
    "Color",
    "RedBlackTreeError",
    "EmptyContainerError",
    "InvariantViolationError",
]
