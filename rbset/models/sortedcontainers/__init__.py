"""
Sorted container implementations.
"""

from rbset.models.sortedcontainers.red_black_tree import RedBlackTree

__all__ = ["RedBlackTree"]
