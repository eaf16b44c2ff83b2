"""Double-ended single-pass cursor over an IndexedCircularList."""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from idxring.errors import ConcurrentModificationError
from idxring.node import RingNode
from idxring.types import NodeId

if TYPE_CHECKING:
    from idxring.ring import IndexedCircularList

T = TypeVar("T")
D = TypeVar("D")

_LOG = logging.getLogger(__name__)

_MISSING: Any = object()


class BidirectionalCursor(Generic[T]):
    """
    Cursor that consumes a ring from both ends until the ends meet.

    The window spans every node present when the cursor was created, exactly
    once, even though the underlying links wrap around. Stepping forward
    follows ``next`` links from the head; stepping backward follows ``prev``
    links from the tail. When both positions point at the same node, taking
    it from either end exhausts the cursor for good.

    The cursor only reads the list. Inserting into the list while a cursor is
    alive makes the next step raise ConcurrentModificationError.
    """

    __slots__ = ("_ring", "_forward", "_backward", "_version", "_remaining")

    def __init__(
        self,
        ring: "IndexedCircularList[T]",
        forward: NodeId | None,
        backward: NodeId | None,
        *,
        version: int | None = None,
        remaining: int | None = None,
    ) -> None:
        self._ring = ring
        self._forward = forward
        self._backward = backward
        self._version = ring.version if version is None else version
        if remaining is None:
            remaining = 0 if forward is None else len(ring)
        self._remaining = remaining

    @property
    def forward_pos(self) -> NodeId | None:
        """Identifier the next forward step will produce, or None when exhausted."""
        return self._forward

    @property
    def backward_pos(self) -> NodeId | None:
        """Identifier the next backward step will produce, or None when exhausted."""
        return self._backward

    @property
    def exhausted(self) -> bool:
        """Return True once every element of the window has been produced."""
        return self._forward is None

    def __iter__(self) -> "BidirectionalCursor[T]":
        return self

    def __next__(self) -> T:
        """Produce the element at the front of the window."""
        current = self._forward
        if current is None:
            raise StopIteration
        node = self._resolve(current)
        if current == self._backward:
            self._exhaust()
        else:
            self._forward = node.next
            self._remaining -= 1
        return node.value

    @overload
    def next_back(self) -> T: ...

    @overload
    def next_back(self, default: D) -> T | D: ...

    def next_back(self, default: Any = _MISSING) -> Any:
        """
        Produce the element at the back of the window.

        Args:
            default: Returned instead of raising once the window is exhausted,
                like the second argument of builtin ``next()``.

        Raises:
            StopIteration: If exhausted and no default was given
            ConcurrentModificationError: If the list changed since creation
        """
        current = self._backward
        if current is None:
            if default is _MISSING:
                raise StopIteration
            return default
        node = self._resolve(current)
        if current == self._forward:
            self._exhaust()
        else:
            self._backward = node.prev
            self._remaining -= 1
        return node.value

    def rev(self) -> Iterator[T]:
        """Iterate backward, consuming the same window as this cursor."""
        while self._backward is not None:
            yield self.next_back()

    def copy(self) -> "BidirectionalCursor[T]":
        """Return an independent cursor at the same positions."""
        return BidirectionalCursor(
            self._ring,
            self._forward,
            self._backward,
            version=self._version,
            remaining=self._remaining,
        )

    __copy__ = copy

    def __len__(self) -> int:
        """Return the number of elements left in the window."""
        return self._remaining

    def __length_hint__(self) -> int:
        return self._remaining

    def __bool__(self) -> bool:
        return not self.exhausted

    def _exhaust(self) -> None:
        self._forward = self._backward = None
        self._remaining = 0

    def _resolve(self, node_id: NodeId) -> RingNode[T]:
        if self._ring.version != self._version:
            _LOG.error(
                "List modified during traversal (cursor version %d, list version %d)",
                self._version,
                self._ring.version,
            )
            raise ConcurrentModificationError("IndexedCircularList changed during iteration")
        return self._ring._lookup(node_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(forward_pos={self._forward!r}, backward_pos={self._backward!r})"
