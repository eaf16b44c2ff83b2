"""idxring - Circular doubly-linked list stored in an identifier-keyed arena."""

from idxring.cursor import BidirectionalCursor
from idxring.errors import (
    ConcurrentModificationError,
    IndexedRingError,
    NodeNotFoundError,
    RingCorruptedError,
)
from idxring.node import RingNode
from idxring.ring import IndexedCircularList
from idxring.types import NodeId

__version__ = "0.0.1"

__all__ = [
    "IndexedCircularList",
    "BidirectionalCursor",
    "RingNode",
    "NodeId",
    "IndexedRingError",
    "RingCorruptedError",
    "ConcurrentModificationError",
    "NodeNotFoundError",
]
