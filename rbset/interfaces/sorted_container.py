"""
SortedContainer abstract base class for ordered collections of unique values.
"""

from abc import abstractmethod
from collections.abc import Callable
from typing import TypeVar

from rbset.interfaces.range_iterable import RangeIterable
from rbset.models.traversal import TraversalOrder

T = TypeVar("T")


class SortedContainer(RangeIterable[T]):
    """
    Abstract base class for ordered containers of unique values.

    Provides O(log N) operations for insert, remove and search.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - RedBlackTree: worst-case logarithmic insert, remove and search
    """

    @abstractmethod
    def insert(self, value: T) -> None:
        """
        Insert a value if it is not already present.

        Args:
            value: The value to insert. Inserting a present value is a no-op.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def remove(self, value: T) -> None:
        """
        Remove a value if it is present.

        Args:
            value: The value to remove. Removing an absent value is a no-op.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def search(self, value: T) -> bool:
        """
        Check if a value is stored.

        Args:
            value: The value to look up.

        Returns:
            True if the value is present, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def min(self) -> T:
        """
        Return the smallest stored value.

        Raises:
            EmptyContainerError: If the container is empty.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def max(self) -> T:
        """
        Return the largest stored value.

        Raises:
            EmptyContainerError: If the container is empty.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of stored values.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def empty(self) -> bool:
        """
        Return True if no values are stored.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def traverse(self, order: TraversalOrder, visitor: Callable[[T], object]) -> None:
        """
        Apply a visitor to every stored value in the given order.

        Args:
            order: PRE, IN, POST or LEVEL order.
            visitor: Called once per value. Must not mutate the container.

        Time complexity: O(N)
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every value."""
        pass
