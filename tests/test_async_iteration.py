"""
Tests for async iteration over RedBlackTree.
"""

import asyncio

import pytest

from rbset import RedBlackTree


class TestAsyncIteration:
    """Tests for __aiter__ and async_iterator."""

    async def test_async_for(self, scenario_tree):
        """Test async iteration yields sorted values."""
        values = [value async for value in scenario_tree]
        assert values == [5, 10, 15, 20, 25, 30]

    async def test_async_range(self):
        """Test async range iteration over [start, end)."""
        tree = RedBlackTree(range(20))

        values = [value async for value in tree.async_iterator(5, 9)]
        assert values == [5, 6, 7, 8]

    async def test_async_empty(self, tree):
        """Test async iteration over an empty tree stops immediately."""
        assert [value async for value in tree] == []

    async def test_async_iterator_protocol(self):
        """Test __anext__ raises StopAsyncIteration at the end."""
        tree = RedBlackTree([1])
        iterator = tree.async_iterator()

        assert await iterator.__anext__() == 1
        with pytest.raises(StopAsyncIteration):
            await iterator.__anext__()

    async def test_async_mutation_detected(self):
        """Test mutating during async iteration raises."""
        tree = RedBlackTree([1, 2, 3])
        with pytest.raises(RuntimeError):
            async for value in tree:
                tree.insert(value + 100)

    async def test_async_mutation_after_last_value(self):
        """Test inserting a new maximum at the last value is detected."""
        tree = RedBlackTree([1, 2, 3])
        with pytest.raises(RuntimeError):
            async for value in tree:
                if value == 3:
                    tree.insert(4)

    async def test_concurrent_readers(self, large_sample_values):
        """Test several tasks can read the same tree concurrently."""
        tree = RedBlackTree(large_sample_values)

        async def collect(start, end):
            return [value async for value in tree.async_iterator(start, end)]

        results = await asyncio.gather(*(collect(i * 100, (i + 1) * 100) for i in range(10)))

        for i, values in enumerate(results):
            assert values == list(range(i * 100, (i + 1) * 100))
