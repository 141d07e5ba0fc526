"""
Data models for the ordered container: nodes, traversal orders and errors.
"""

from rbset.models.exceptions import (
    EmptyContainerError,
    InvariantViolationError,
    RedBlackTreeError,
)
from rbset.models.node import NIL, Color, Node, NodeArena
from rbset.models.traversal import TraversalOrder

__all__ = [
    "NIL",
    "Color",
    "Node",
    "NodeArena",
    "TraversalOrder",
    "RedBlackTreeError",
    "EmptyContainerError",
    "InvariantViolationError",
]
