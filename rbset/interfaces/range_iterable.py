"""
RangeIterable protocol for data structures that support range iteration.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class RangeIterable(ABC, Generic[T]):
    """
    Protocol for ordered containers that support iteration over a range of values.

    Implementations must support:
    - Full iteration via __iter__
    - Range-bounded iteration via iterator(start, end)
    - Async iteration via __aiter__
    - Async range-bounded iteration via async_iterator(start, end)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        """Return an iterator over all values in sorted order."""
        pass

    @abstractmethod
    def iterator(self, start: T | None = None, end: T | None = None) -> Iterator[T]:
        """
        Return an iterator over values in the specified range.

        Args:
            start: Lower bound (inclusive). If None, starts from the smallest value.
            end: Upper bound (exclusive). If None, iterates to the largest value.

        Returns:
            Iterator yielding values in sorted order.
        """
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[T]:
        """Return an async iterator over all values in sorted order."""
        pass

    @abstractmethod
    def async_iterator(
        self, start: T | None = None, end: T | None = None
    ) -> AsyncIterator[T]:
        """
        Return an async iterator over values in the specified range.

        Args:
            start: Lower bound (inclusive). If None, starts from the smallest value.
            end: Upper bound (exclusive). If None, iterates to the largest value.

        Returns:
            AsyncIterator yielding values in sorted order.
        """
        pass
