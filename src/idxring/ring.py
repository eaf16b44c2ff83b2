"""Main IndexedCircularList implementation."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Generic, NoReturn, TypeVar

from idxring.cursor import BidirectionalCursor
from idxring.errors import NodeNotFoundError, RingCorruptedError
from idxring.node import RingNode
from idxring.types import NodeId

T = TypeVar("T")

_LOG = logging.getLogger(__name__)


class IndexedCircularList(Generic[T]):
    """
    Circular doubly-linked list stored in an identifier-keyed arena.

    Nodes never reference each other directly. Each node records the
    identifiers of its neighbours, and every link is resolved through the
    arena mapping. New values are linked in just before the head, so the
    head stays fixed and forward traversal follows insertion order.
    """

    def __init__(self, values: Iterable[T] | None = None) -> None:
        """
        Initialize the list.

        Args:
            values: Optional finite iterable whose items are inserted in the
                order they are produced.
        """
        self._next_id: NodeId = 0
        self._head: NodeId | None = None
        self._nodes: dict[NodeId, RingNode[T]] = {}
        self._version = 0
        if values is not None:
            for value in values:
                self.insert(value)

    @classmethod
    def from_iterable(cls, values: Iterable[T]) -> "IndexedCircularList[T]":
        """Build a list holding ``values`` in produced order."""
        return cls(values)

    @property
    def next_id(self) -> NodeId:
        """Identifier the next inserted node will receive."""
        return self._next_id

    @property
    def head(self) -> NodeId | None:
        """Identifier of the canonical first node, or None when empty."""
        return self._head

    @property
    def nodes(self) -> Mapping[NodeId, RingNode[T]]:
        """
        Read-only view of the arena.

        Nodes are frozen; inserting rebinds a neighbour to a relinked copy, so
        a node obtained earlier keeps the links it had at that time.
        """
        return MappingProxyType(self._nodes)

    @property
    def version(self) -> int:
        """Modification counter, bumped by every insertion."""
        return self._version

    def insert(self, value: T) -> None:
        """
        Insert a value as the new tail, immediately before the head.

        Args:
            value: Value to store

        Raises:
            RingCorruptedError: If the head or the current tail is missing
                from the arena. The ring is left untouched in that case.
        """
        node_id = self._next_id

        if self._head is None:
            self._nodes[node_id] = RingNode.singleton(node_id, value)
            self._head = node_id
        else:
            # Resolve both neighbours before rewiring any link
            head = self._head
            head_node = self._lookup(head)
            old_tail = head_node.prev
            self._lookup(old_tail)

            # Re-read head after relinking the tail; they are the same node in a ring of one
            self._nodes[old_tail] = replace(self._nodes[old_tail], next=node_id)
            self._nodes[head] = replace(self._nodes[head], prev=node_id)
            self._nodes[node_id] = RingNode(value=value, prev=old_tail, next=head)

        self._next_id += 1
        self._version += 1
        _LOG.debug("Inserted node %d (ring size %d)", node_id, len(self._nodes))

    push = insert

    def iter(self) -> BidirectionalCursor[T]:
        """Return a cursor spanning the whole ring exactly once."""
        if self._head is None:
            return BidirectionalCursor(self, None, None)
        tail = self._lookup(self._head).prev
        _LOG.debug(
            "Cursor created over %d nodes (head=%d, tail=%d)", len(self._nodes), self._head, tail
        )
        return BidirectionalCursor(self, self._head, tail)

    def node(self, node_id: NodeId) -> RingNode[T]:
        """
        Return the node stored under an identifier.

        Raises:
            NodeNotFoundError: If no node has that identifier
        """
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def validate(self) -> None:
        """
        Check every structural invariant of the ring.

        Raises:
            RingCorruptedError: On the first violated invariant
        """
        if (self._head is None) != (not self._nodes):
            self._corrupted(f"head is {self._head!r} but the arena holds {len(self._nodes)} nodes")
        if self._head is None:
            return

        for node_id, node in self._nodes.items():
            if self._lookup(node.next).prev != node_id:
                self._corrupted(f"node {node.next} does not link back to node {node_id}")
            if self._lookup(node.prev).next != node_id:
                self._corrupted(f"node {node.prev} does not link forward to node {node_id}")

        # Symmetric links can still form several disjoint rings
        seen = 0
        current = self._head
        while True:
            current = self._lookup(current).next
            seen += 1
            if current == self._head or seen > len(self._nodes):
                break
        if seen != len(self._nodes):
            self._corrupted(f"ring from head covers {seen} of {len(self._nodes)} nodes")

    def _lookup(self, node_id: NodeId) -> RingNode[T]:
        """Resolve a link; a miss means the ring is corrupted."""
        node = self._nodes.get(node_id)
        if node is None:
            self._corrupted(f"link to missing node {node_id}")
        return node

    def _corrupted(self, reason: str) -> NoReturn:
        _LOG.error("Ring invariant violated: %s", reason)
        raise RingCorruptedError(reason)

    def __iter__(self) -> BidirectionalCursor[T]:
        """Iterate from head to tail."""
        return self.iter()

    def __reversed__(self) -> Iterator[T]:
        """Iterate from tail to head."""
        return self.iter().rev()

    def __len__(self) -> int:
        """Return the number of nodes in the ring."""
        return len(self._nodes)

    def __bool__(self) -> bool:
        """Return True if the ring is non-empty."""
        return bool(self._nodes)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(next_id={self._next_id}, head={self._head!r}, "
            f"nodes={self._nodes!r})"
        )
