"""
Tests for data models: Color, Node, NodeArena, traversal walkers and exceptions.
"""

import pytest

from rbset.models.exceptions import (
    EmptyContainerError,
    InvariantViolationError,
    RedBlackTreeError,
)
from rbset.models.node import NIL, Color, Node, NodeArena
from rbset.models.traversal import (
    WALKERS,
    TraversalOrder,
    inorder,
    levelorder,
    postorder,
    preorder,
)


def build_arena():
    """
    Build a small hand-linked tree in a fresh arena:

            4
          /   \\
         2     6
        / \\     \\
       1   3     7
    """
    arena = NodeArena()
    handles = {value: arena.allocate(value) for value in (4, 2, 6, 1, 3, 7)}

    def link(parent, left=None, right=None):
        node = arena[handles[parent]]
        if left is not None:
            node.left = handles[left]
            arena[handles[left]].parent = handles[parent]
        if right is not None:
            node.right = handles[right]
            arena[handles[right]].parent = handles[parent]

    link(4, 2, 6)
    link(2, 1, 3)
    link(6, right=7)
    return arena, handles[4]


def values(arena, handles):
    return [arena[h].value for h in handles]


class TestNode:
    """Tests for Node and Color."""

    def test_new_node_defaults(self):
        """Test a new node is red and unlinked."""
        node = Node(value=5)
        assert node.color == Color.RED
        assert node.left == NIL
        assert node.right == NIL
        assert node.parent == NIL

    def test_color_values(self):
        """Test color ordering used by IntEnum."""
        assert Color.RED == 0
        assert Color.BLACK == 1


class TestNodeArena:
    """Tests for NodeArena handle management."""

    def test_allocate_returns_detached_red_node(self):
        """Test allocation produces a red node with NIL links."""
        arena = NodeArena()
        handle = arena.allocate("a")

        assert handle != NIL
        assert arena[handle].value == "a"
        assert arena[handle].color == Color.RED
        assert arena[handle].parent == NIL
        assert len(arena) == 1

    def test_nil_reads_black(self):
        """Test NIL reports BLACK without being stored anywhere."""
        arena = NodeArena()
        assert arena.color(NIL) == Color.BLACK
        assert len(arena) == 0

    def test_nil_cannot_be_dereferenced(self):
        """Test NIL is not a node and cannot be mutated through the arena."""
        arena = NodeArena()
        arena.allocate(1)

        with pytest.raises(IndexError):
            arena[NIL]
        with pytest.raises(IndexError):
            arena.release(NIL)

    def test_release_and_reuse(self):
        """Test released handles are recycled."""
        arena = NodeArena()
        first = arena.allocate(1)
        arena.allocate(2)

        arena.release(first)
        assert len(arena) == 1
        with pytest.raises(IndexError):
            arena[first]

        reused = arena.allocate(3)
        assert reused == first
        assert arena[reused].value == 3
        assert len(arena) == 2

    def test_double_release(self):
        """Test releasing a free slot is rejected."""
        arena = NodeArena()
        handle = arena.allocate(1)
        arena.release(handle)

        with pytest.raises(IndexError):
            arena.release(handle)

    def test_unknown_handle(self):
        """Test handles never allocated are rejected."""
        arena = NodeArena()
        with pytest.raises(IndexError):
            arena[7]

    def test_reset(self):
        """Test reset drops every slot."""
        arena = NodeArena()
        handle = arena.allocate(1)
        arena.allocate(2)
        arena.reset()

        assert len(arena) == 0
        with pytest.raises(IndexError):
            arena[handle]


class TestTraversal:
    """Tests for explicit-stack walkers."""

    def test_inorder(self):
        """Test in-order walk visits values sorted."""
        arena, root = build_arena()
        assert values(arena, inorder(arena, root)) == [1, 2, 3, 4, 6, 7]

    def test_preorder(self):
        """Test pre-order walk visits node before children."""
        arena, root = build_arena()
        assert values(arena, preorder(arena, root)) == [4, 2, 1, 3, 6, 7]

    def test_postorder(self):
        """Test post-order walk visits children before node."""
        arena, root = build_arena()
        assert values(arena, postorder(arena, root)) == [1, 3, 2, 7, 6, 4]

    def test_levelorder(self):
        """Test level-order walk is breadth-first, left to right."""
        arena, root = build_arena()
        assert values(arena, levelorder(arena, root)) == [4, 2, 6, 1, 3, 7]

    def test_empty_walks(self):
        """Test every walker yields nothing from NIL."""
        arena = NodeArena()
        for walker in WALKERS.values():
            assert list(walker(arena, NIL)) == []

    def test_walker_table_covers_every_order(self):
        """Test each TraversalOrder has a walker."""
        assert set(WALKERS) == set(TraversalOrder)

    def test_deep_left_spine(self):
        """Test walkers handle a degenerate chain without recursion."""
        arena = NodeArena()
        depth = 5000
        handles = [arena.allocate(v) for v in range(depth, 0, -1)]
        for parent, child in zip(handles, handles[1:]):
            arena[parent].left = child
            arena[child].parent = parent

        assert values(arena, inorder(arena, handles[0])) == list(range(1, depth + 1))
        assert len(list(postorder(arena, handles[0]))) == depth
        assert len(list(preorder(arena, handles[0]))) == depth


class TestExceptions:
    """Tests for the error taxonomy."""

    def test_empty_container_error(self):
        """Test EmptyContainerError names the failed query."""
        error = EmptyContainerError("min")
        assert error.operation == "min"
        assert "min" in str(error)
        assert isinstance(error, RedBlackTreeError)

    def test_invariant_violation_error(self):
        """Test InvariantViolationError carries its reason."""
        error = InvariantViolationError("root is not black")
        assert error.reason == "root is not black"
        assert "root is not black" in str(error)
        assert isinstance(error, RedBlackTreeError)
