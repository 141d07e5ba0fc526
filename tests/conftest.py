"""
Shared pytest fixtures for red-black tree tests.
"""

import random

import pytest

from rbset import RedBlackTree

SCENARIO_VALUES = [10, 20, 30, 15, 25, 5]


@pytest.fixture
def tree():
    """Provide a fresh, empty RedBlackTree."""
    return RedBlackTree()


@pytest.fixture
def checked_tree():
    """Provide an empty RedBlackTree that validates itself after every mutation."""
    return RedBlackTree(check_invariants=True)


@pytest.fixture
def scenario_tree():
    """Provide a tree built from 10, 20, 30, 15, 25, 5 inserted in that order."""
    return RedBlackTree(SCENARIO_VALUES)


@pytest.fixture
def rng():
    """Provide a seeded random generator so stress tests are reproducible."""
    return random.Random(12345)


@pytest.fixture
def large_sample_values(rng):
    """Provide 1000 distinct values in shuffled order."""
    values = list(range(1000))
    rng.shuffle(values)
    return values
