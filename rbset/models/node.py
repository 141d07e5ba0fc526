"""
Node storage for the Red-Black Tree.

Nodes live in an arena owned by a single tree and are addressed by integer
handles. Links between nodes are handles too; the reserved handle ``NIL``
marks an absent child or parent and is never backed by storage.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Reserved handle for "no node". Reads as BLACK, owns nothing, cannot be mutated.
NIL = -1


class Color(IntEnum):
    """Node color for Red-Black Tree."""

    RED = 0
    BLACK = 1


@dataclass
class Node(Generic[T]):
    """Node in the Red-Black Tree."""

    value: T
    color: Color = Color.RED
    left: int = NIL
    right: int = NIL
    parent: int = NIL


class NodeArena(Generic[T]):
    """
    Owns every node of one tree and hands out stable integer handles.

    Handles stay valid until released. Released slots are recycled by later
    allocations, so a handle must not be used after ``release``.
    """

    def __init__(self) -> None:
        self._slots: list[Node[T] | None] = []
        self._free: list[int] = []

    def allocate(self, value: T) -> int:
        """
        Create a detached RED node holding ``value``.

        Args:
            value: The value to store.

        Returns:
            Handle of the new node.
        """
        node = Node(value=value)
        if self._free:
            handle = self._free.pop()
            self._slots[handle] = node
        else:
            handle = len(self._slots)
            self._slots.append(node)
        return handle

    def release(self, handle: int) -> None:
        """Free the slot behind ``handle``."""
        self._check(handle)
        self._slots[handle] = None
        self._free.append(handle)

    def color(self, handle: int) -> Color:
        """Color of ``handle``; ``NIL`` always reads as BLACK."""
        if handle == NIL:
            return Color.BLACK
        return self[handle].color

    def reset(self) -> None:
        self._slots = []
        self._free = []

    def __getitem__(self, handle: int) -> Node[T]:
        self._check(handle)
        return self._slots[handle]  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)

    def _check(self, handle: Any) -> None:
        if handle == NIL:
            raise IndexError("NIL does not reference a node")
        if not 0 <= handle < len(self._slots) or self._slots[handle] is None:
            raise IndexError(f"No live node at handle {handle}")
