"""
Custom exceptions for the red-black tree container.
"""


class RedBlackTreeError(Exception):
    """Base class for errors raised by the container."""


class EmptyContainerError(RedBlackTreeError):
    """
    Raised when a query needs at least one stored value but the tree is empty.

    This is the only error on the container's core contract; duplicate
    inserts and removals of absent values are no-ops.
    """

    def __init__(self, operation: str):
        """
        Initialize empty-container error.

        Args:
            operation: Name of the query that failed (e.g. "min").
        """
        self.operation = operation
        super().__init__(f"RedBlackTree is empty. Failed to get {operation} value")


class InvariantViolationError(RedBlackTreeError):
    """
    Raised by validation when the tree breaks a red-black or ordering invariant.

    Never raised by a correct tree; a fail-fast signal for corrupted state.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Red-black invariant violated: {reason}")
