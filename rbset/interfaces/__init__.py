"""
Abstract base classes for ordered containers.
"""

from rbset.interfaces.range_iterable import RangeIterable
from rbset.interfaces.sorted_container import SortedContainer

__all__ = ["RangeIterable", "SortedContainer"]
